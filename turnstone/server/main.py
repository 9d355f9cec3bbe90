"""FastAPI server for Turnstone matches.

Provides an HTTP/WebSocket API. The server owns the authoritative snapshot of
every match; clients submit moves and receive per-viewer redacted states.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from .schemas.requests import CreateMatchRequest, MakeMoveRequest
from .schemas.responses import (
    CreateMatchResponse,
    MakeMoveResponse,
    MatchStateResponse,
)
from .session import MatchSessionManager

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Global session manager
sessions = MatchSessionManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    logger.info("Turnstone server starting...")
    yield
    logger.info("Turnstone server shutting down...")
    await sessions.cleanup_all()


# Create FastAPI app
app = FastAPI(
    title="Turnstone API",
    description="Authoritative match server for Turnstone games",
    version="1.0.0",
    lifespan=lifespan,
)

# Enable CORS for browser clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================
# API ENDPOINTS
# ============================================


@app.get("/api")
async def api_root():
    """API root endpoint - server health check."""
    return {
        "service": "Turnstone",
        "status": "operational",
        "activeMatches": len(sessions.sessions),
    }


@app.post("/api/matches", response_model=CreateMatchResponse)
async def create_match(request: CreateMatchRequest):
    """Create a new match.

    The seed is fixed here (picked at random when omitted) and never returned.

    Example:
        POST /api/matches
        {"game": "dice-duel", "numPlayers": 2, "seed": 42}
    """
    try:
        session = sessions.create_session(
            game_name=request.game,
            num_players=request.numPlayers,
            seed=request.seed,
        )
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown game: {request.game}")
    except ValueError as e:
        logger.warning(f"Invalid match configuration: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create match: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create match: {str(e)}")

    return CreateMatchResponse(
        matchId=session.id,
        game=request.game,
        numPlayers=session.state.ctx.num_players,
        state=session.get_state_for_player(None),
    )


@app.get("/api/matches/{match_id}/state", response_model=MatchStateResponse)
async def get_match_state(match_id: str, playerID: str | None = None):  # noqa: N803
    """Get the state of a match as one viewer sees it.

    Example:
        GET /api/matches/match-abc123/state?playerID=0
    """
    session = sessions.get(match_id)
    if not session:
        raise HTTPException(status_code=404, detail="Match not found")

    return MatchStateResponse(
        matchId=match_id,
        playerID=playerID,
        state=session.get_state_for_player(playerID),
    )


@app.post("/api/matches/{match_id}/moves", response_model=MakeMoveResponse)
async def make_move(match_id: str, request: MakeMoveRequest):
    """Submit a move to the authoritative executor.

    Example:
        POST /api/matches/match-abc123/moves
        {"playerID": "0", "move": "roll", "args": [], "stateID": 0}
    """
    session = sessions.get(match_id)
    if not session:
        raise HTTPException(status_code=404, detail="Match not found")

    try:
        errors = session.process_move(
            player_id=request.playerID,
            move_name=request.move,
            args=request.args,
            state_id=request.stateID,
        )
    except Exception as e:
        logger.error(f"Match {match_id}: move execution failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to execute move: {str(e)}")

    if errors:
        return MakeMoveResponse(accepted=False, stateID=session.state.state_id, errors=errors)

    await session.broadcast_state()
    return MakeMoveResponse(
        accepted=True,
        stateID=session.state.state_id,
        gameover=session.state.ctx.gameover,
    )


@app.delete("/api/matches/{match_id}")
async def delete_match(match_id: str):
    """Delete a match session."""
    if sessions.delete(match_id):
        return {"message": f"Match {match_id} deleted"}
    else:
        raise HTTPException(status_code=404, detail="Match not found")


# ============================================
# WEBSOCKET ENDPOINT
# ============================================


@app.websocket("/ws/matches/{match_id}")
async def websocket_endpoint(
    websocket: WebSocket, match_id: str, playerID: str | None = None  # noqa: N803
):
    """WebSocket connection for real-time state updates.

    Clients receive:
    - CONNECTED: Initial connection confirmation with their view of the state
    - STATE_UPDATED: Their view of the state after every committed move
    """
    session = sessions.get(match_id)
    if not session:
        await websocket.close(code=1008, reason="Match not found")
        return

    await websocket.accept()
    session.add_connection(websocket, playerID)

    try:
        await websocket.send_json(
            {
                "type": "CONNECTED",
                "matchId": match_id,
                "state": session.get_state_for_player(playerID),
            }
        )

        logger.info(f"WebSocket connected to match {match_id} (playerID={playerID})")

        # Keep connection alive and handle client messages
        while True:
            data = await websocket.receive_json()

            # Handle ping/pong for keepalive
            if data.get("type") == "PING":
                await websocket.send_json({"type": "PONG"})

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected from match {match_id}")
    except Exception as e:
        logger.error(f"WebSocket error in match {match_id}: {e}", exc_info=True)
    finally:
        session.remove_connection(websocket)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
