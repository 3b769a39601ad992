# settings.py

# Alignments
ALIGNMENTS = ["LG", "NG", "CG", "LN", "N", "CN", "LE", "NE", "CE"]
ALIGNMENT_NAMES = {
    "LG": "Lawful good",
    "NG": "Neutral good",
    "CG": "Chaotic good",
    "LN": "Lawful neutral",
    "N": "Neutral",
    "CN": "Chaotic neutral",
    "LE": "Lawful evil",
    "NE": "Neutral evil",
    "CE": "Chaotic evil",
}
IDEAL_AXES = ["any", "good", "evil", "lawful", "chaotic", "neutral"]

# Characters
GENDERS = ["Female", "Male", "Non-binary", "Genderfluid", "Agender"]
NONBINARY_GENDERS = ["Non-binary", "Genderfluid", "Agender"]
LIFESTYLES = ["Poor", "Middle", "Rich"]

# Option sentinels for forced values (mark / house)
RANDOMIZE = "random"
NONE = "none"

# Batch size
DEFAULT_COUNT = 1
MAX_COUNT = 100
