"""Engine configuration constants."""

# Players
DEFAULT_NUM_PLAYERS = 2

# Seeds
RANDOM_SEED_SENTINEL = "random"  # Resolve to an unpredictable seed at game creation
PLACEHOLDER_SEED = "0"  # Throwaway stream for speculative executions
SEED_SPACE = 2**32  # Range of generated seeds

# Dice
DEFAULT_SPOT_VALUE = 6
PREDEFINED_DICE = {
    "D4": 4,
    "D6": 6,
    "D8": 8,
    "D10": 10,
    "D12": 12,
    "D20": 20,
}

# Alea / Mash
MASH_INITIAL = 0xEFC8249D
MASH_MULTIPLIER = 0.02519603282416938
ALEA_MULTIPLIER = 2091639
TWO_POW_32 = 0x100000000
TWO_POW_NEG_32 = 2.3283064365386963e-10  # 2**-32
