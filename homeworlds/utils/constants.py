"""Game configuration constants."""

# Piece domain
COLORS = ("yellow", "green", "blue", "red")  # Canonical color order
SIZES = (1, 2, 3)  # Small, medium, large
PIECES_PER_SIZE = 3  # Physical pieces per (color, size) pair
TOTAL_PIECES = len(COLORS) * len(SIZES) * PIECES_PER_SIZE  # 36

# Players
PLAYERS = ("player1", "player2")
FIRST_PLAYER = "player1"

# Phases
PHASE_SETUP = "setup"
PHASE_NORMAL = "normal"

# Systems
HOME_SYSTEM_STARS = 2  # Stars in a binary home system
OVERPOPULATION_THRESHOLD = 4  # Pieces of one color that trigger overpopulation
