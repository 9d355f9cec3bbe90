"""HTTP/WebSocket server acting as the authoritative executor."""
