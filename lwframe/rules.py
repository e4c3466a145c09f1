"""
Deterministic framing rules.

This file holds the fixed lexical conventions of the corpus language:
the boundary and quote characters, the commentary marker, the assignment
marker and the reserved vocabulary. Everything the engine treats as
"grammar" lives here so it can be reviewed in one place.
"""

DELIMITER = "|"
QUOTE = '"'
COMMENT_PREFIX = "//"
CORPUS_SUFFIX = ".lw"
OUTPUT_ENCODING = "utf-8"

ASSIGNMENT_MARKER = ("PLACED", "AS")

# Reserved words that may still appear as the trailing operand of an operator
# phrase, where they name a value rather than act as grammar.
OPERAND_EXCEPTIONS = {
    ("PUT", "TOGETHER"): ("ANOTHER",),
}

MATERIAL_PREPOSITION = "OF"

# Qualities that read as qualifiers after MATERIAL_PREPOSITION. They are not
# reserved words: anywhere else they are ordinary identifiers.
MATERIAL_QUALITIES = (
    "STONE", "WATER", "STEEL", "GLASS", "ASH", "PAPER", "SALT",
    "LIMESTONE", "SANDSTONE", "WOOD", "IRON", "GOLD",
)

RESERVED_WORDS = (
    # core
    "PLACED", "AS", "OR", "NOT", "RATHER", "THAN", "EITHER", "END",
    "IF", "OTHERWISE", "IS", "THEN",

    # temporal markers
    "IN", "THE", "STILL", "OF", "NIGHT", "IT", "WAS", "WILL", "BE",
    "ONCE", "AGAIN", "YET", "BUT", "SOON", "ALWAYS", "ALREADY",
    "WHEN", "PRESSURE", "APPLIED", "FOREVER", "DAY", "LONG", "LASTS",
    "DUE", "COURSE", "AT", "SAME", "MOMENT", "EVENTS", "AFTER", "HERE", "THERE",

    # intentionality modifiers
    "MAY", "CONSTRUCTED", "NEED", "BUILT", "AND", "RECEIVED",
    "TO", "WITNESSED", "PER", "SE", "WITH", "INTENT", "MALICE",
    "AFORETHOUGHT", "ALL", "INNOCENCE", "THAT", "MUCH", "ADO",

    # substances and units
    "MATTER", "COPPER", "BRONZE", "CLAY", "SAND", "EARTH",
    "LIGHT", "AIR", "FIRE", "DEGREE", "DEGREES", "POUND", "POUNDS",
    "INCH", "INCHES", "FOOT", "FEET", "METER", "METERS",
    "KILOGRAM", "KILOGRAMS", "GRAM", "GRAMS", "OUNCE", "OUNCES",

    # removal
    "REMOVE", "FROM", "WHICH", "UN", "ABSENCE", "NOTED",
    "REMOVAL", "LATHING",

    # loops
    "OVER", "UNTIL", "PERPETUALLY", "REPEATED", "TIMES", "FOR", "EACH",

    # functions
    "SHOW", "TELL", "CALLED", "RETURN",

    # observer actions
    "UPON", "WALL", "FLOOR", "CEILING", "GROUND", "SPOKEN", "ALOUD",
    "WHISPERED", "INSCRIBED", "DESCRIBED", "PRESENTED", "RECEIVER",
    "HOLD", "MIND", "SEE", "SEEN", "LO", "BEHOLD", "FAR", "EYE",
    "CAN", "RELATION", "DOCUMENTED",

    # operators
    "SCATTERED", "ACROSS", "GATHERED", "INTO", "PUT", "TOGETHER",
    "TAKEN", "APART", "PULLED", "AWAY", "PRESSED", "AGAINST",
    "WRAPPED", "AROUND", "BOUND", "DIVIDED", "AMONG", "MULTIPLIED",
    "BY", "DIMINISHED", "REDUCED", "INCREASED", "EXPANDED",
    "COMPRESSED", "WITHIN", "REMOVED", "THROWN", "ASIDE",
    "SET", "NEXT", "SUSPENDED", "ABOVE", "BELOW",
    "HELD", "BETWEEN", "PUSHED", "BEYOND", "CONFINED", "DRAWN",
    "THROUGH", "JOINED", "TORN", "TWO", "BROKEN", "PIECES",
    "FOLDED", "HALF", "STACKED", "ON", "TOP", "ANOTHER",
    "FOUR", "DIRECTIONS", "CONCENTRATED", "ONE", "POINT",
    "STRETCHED", "LIMITS", "CONTRACTED", "CENTER", "ROTATED", "AXIS",
    "REFLECTED", "INVERTED", "WITHOUT", "REPLACED", "OTHER",

    # conditionals
    "PRESENT", "ABSENT", "EXCEEDS", "MEASURE", "NOTHING",
    "MATCHES", "FORM", "DIFFERS", "EQUAL", "GREATER", "LESSER",
    "CONTAINS", "LACKS",

    # quantifiers
    "A", "ENOUGH", "TOO", "BIT", "LITTLE", "MORE", "LESS",
    "GIVE", "TAKE", "SUFFICIENT", "MANY", "SOME",

    # literals
    "TRUE", "FALSE", "SUCH", "BITS",

    # measurement separator, as in "36 X 36"
    "X",
)
