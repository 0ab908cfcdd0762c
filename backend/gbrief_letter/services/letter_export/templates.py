"""
g-brief Template Constants

Macro names and fixed boilerplate of the g-brief letter class.
Templates are HARD-LOCKED - the assembler only decides which of them appear.
"""
from typing import Dict, Tuple


# =============================================================================
# BOILERPLATE
# =============================================================================

TIMESTAMP_FORMAT = "%% Created %Y-%m-%d %a %H:%M\n"

DOCUMENT_BEGIN = "\\begin{document}\n"
LETTER_BEGIN = "\\begin{g-brief}\n"
LETTER_END = "\\end{g-brief}\n"
DOCUMENT_END = "\\end{document}\n"

# Explicit LaTeX line break used inside address macros
LINE_BREAK = "\\\\\n"

DEFAULT_PACKAGES = (
    "\\usepackage[utf8]{inputenc}",
    "\\usepackage[T1]{fontenc}",
    "\\usepackage{hyperref}",
)

HYPERREF_TEMPLATE = (
    "\\hypersetup{\n"
    " pdfauthor={%a},\n"
    " pdftitle={%t},\n"
    " pdfkeywords={%k},\n"
    " pdfsubject={%d},\n"
    " pdfcreator={%c},\n"
    " pdflang={%L}}\n"
)


# =============================================================================
# FIELD MACROS
# =============================================================================

NAME_MACRO = "Name"
FROM_ADDRESS_MACRO = "RetourAdresse"
TO_ADDRESS_MACRO = "Adresse"
DATE_MACRO = "Datum"
SUBJECT_MACRO = "Betreff"
OPENING_MACRO = "Anrede"
CLOSING_MACRO = "Gruss"
SIGNATURE_MACRO = "Unterschrift"

# Second argument of \Gruss: space left for the handwritten signature
CLOSING_SPACING = "1cm"


# =============================================================================
# SETTINGS SWITCHES
# =============================================================================

# Boolean option -> argument-less switch macro, in emission order.
# use_name is handled separately since it needs the author.
SWITCH_MACROS: Dict[str, str] = {
    "use_our_reference": "unserzeichen",
    "use_foldmarks": "faltmarken",
    "use_punchmarks": "lochermarke",
    "use_windowmarks": "fenstermarken",
    "use_separators": "trennlinien",
}

SETTINGS_ORDER: Tuple[str, ...] = ("use_name",) + tuple(SWITCH_MACROS)


# =============================================================================
# FOOTER COLUMNS
# =============================================================================

FOOTER_SLOTS: Tuple[str, ...] = ("A", "B", "C", "D", "E", "F")

# (tag, macro prefix) in emission order
FOOTER_BLOCKS: Tuple[Tuple[str, str], ...] = (
    ("name", "NameZeile"),
    ("address", "AdressZeile"),
    ("phone", "TelefonZeile"),
    ("internet", "InternetZeile"),
    ("bank", "BankZeile"),
)


def macro(name: str, *args: str) -> str:
    """\\name{arg1}{arg2}... followed by a newline."""
    return "\\" + name + "".join("{" + a + "}" for a in args) + "\n"
