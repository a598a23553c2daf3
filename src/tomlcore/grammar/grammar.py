"""Formal grammar rules for the TOML value grammar.

This module documents the grammar as ABNF string constants taken from
the TOML 1.0 ABNF.  The grammar is implemented as hand-written
recursive-descent rules (see ``tomlcore.parser``), but these constants
serve as reference documentation and are printed by the
``toml-core grammar`` command.

Rules that cannot be expressed in ABNF (key-path uniqueness, day of
month against month and leap year) are enforced by the parser and
noted in comments inside the constants.
"""
from __future__ import annotations

# ---------------------------------------------------------------------------
# Whitespace, newline, comment
# ---------------------------------------------------------------------------

GRAMMAR_COMMON = """
ws = *wschar
wschar =  %x20  ; Space
wschar =/ %x09  ; Horizontal tab

newline =  %x0A     ; LF
newline =/ %x0D.0A  ; CRLF

non-ascii = %x80-D7FF / %xE000-10FFFF
non-eol = %x09 / %x20-7E / non-ascii

comment-start-symbol = %x23 ; #
comment = comment-start-symbol *non-eol
"""

# ---------------------------------------------------------------------------
# Key-value pairs
# ---------------------------------------------------------------------------

GRAMMAR_KEYVAL = """
keyval = key keyval-sep val

key = simple-key / dotted-key
simple-key = quoted-key / unquoted-key

unquoted-key = 1*( ALPHA / DIGIT / %x2D / %x5F ) ; A-Z / a-z / 0-9 / - / _
quoted-key = basic-string / literal-string
dotted-key = simple-key 1*( dot-sep simple-key )

dot-sep   = ws %x2E ws  ; . Period
keyval-sep = ws %x3D ws ; =

val = string / boolean / array / date-time / float / integer

; A key path may not be a prefix of, or share all segments with, any
; key path already assigned in the same session.
"""

# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------

GRAMMAR_STRING = """
string = ml-basic-string / basic-string / ml-literal-string / literal-string

basic-string = quotation-mark *basic-char quotation-mark
quotation-mark = %x22            ; "
basic-char = basic-unescaped / escaped
basic-unescaped = wschar / %x21 / %x23-5B / %x5D-7E / non-ascii
escaped = escape escape-seq-char
escape = %x5C                   ; \\
escape-seq-char =  %x22         ; "    quotation mark  U+0022
escape-seq-char =/ %x5C         ; \\    reverse solidus U+005C
escape-seq-char =/ %x62         ; b    backspace       U+0008
escape-seq-char =/ %x66         ; f    form feed       U+000C
escape-seq-char =/ %x6E         ; n    line feed       U+000A
escape-seq-char =/ %x72         ; r    carriage return U+000D
escape-seq-char =/ %x74         ; t    tab             U+0009
escape-seq-char =/ %x75 4HEXDIG ; uXXXX                U+XXXX
escape-seq-char =/ %x55 8HEXDIG ; UXXXXXXXX            U+XXXXXXXX

ml-basic-string = ml-basic-string-delim [ newline ] ml-basic-body
                  ml-basic-string-delim
ml-basic-string-delim = 3quotation-mark
ml-basic-body = *mlb-content *( mlb-quotes 1*mlb-content ) [ mlb-quotes ]
mlb-content = mlb-char / newline / mlb-escaped-nl
mlb-char = mlb-unescaped / escaped
mlb-quotes = 1*2quotation-mark
mlb-unescaped = wschar / %x21 / %x23-5B / %x5D-7E / non-ascii
mlb-escaped-nl = escape ws newline *( wschar / newline )

literal-string = apostrophe *literal-char apostrophe
apostrophe = %x27 ; ' apostrophe
literal-char = %x09 / %x20-26 / %x28-7E / non-ascii

ml-literal-string = ml-literal-string-delim [ newline ] ml-literal-body
                    ml-literal-string-delim
ml-literal-string-delim = 3apostrophe
ml-literal-body = *mll-content *( mll-quotes 1*mll-content ) [ mll-quotes ]
mll-content = mll-char / newline
mll-char = %x09 / %x20-26 / %x28-7E / non-ascii
mll-quotes = 1*2apostrophe
"""

# ---------------------------------------------------------------------------
# Integer and float
# ---------------------------------------------------------------------------

GRAMMAR_NUMBER = """
integer = dec-int / hex-int / oct-int / bin-int

minus = %x2D                       ; -
plus = %x2B                        ; +
underscore = %x5F                  ; _
digit1-9 = %x31-39                 ; 1-9
digit0-7 = %x30-37                 ; 0-7
digit0-1 = %x30-31                 ; 0-1

hex-prefix = %x30.78               ; 0x
oct-prefix = %x30.6F               ; 0o
bin-prefix = %x30.62               ; 0b

dec-int = [ minus / plus ] unsigned-dec-int
unsigned-dec-int = DIGIT / digit1-9 1*( DIGIT / underscore DIGIT )

hex-int = hex-prefix HEXDIG *( HEXDIG / underscore HEXDIG )
oct-int = oct-prefix digit0-7 *( digit0-7 / underscore digit0-7 )
bin-int = bin-prefix digit0-1 *( digit0-1 / underscore digit0-1 )

float = float-int-part ( exp / frac [ exp ] )
float =/ special-float

float-int-part = dec-int
frac = decimal-point zero-prefixable-int
decimal-point = %x2E               ; .
zero-prefixable-int = DIGIT *( DIGIT / underscore DIGIT )

exp = "e" float-exp-part
float-exp-part = [ minus / plus ] zero-prefixable-int

special-float = [ minus / plus ] ( inf / nan )
inf = %x69.6E.66  ; inf
nan = %x6E.61.6E  ; nan
"""

# ---------------------------------------------------------------------------
# Boolean
# ---------------------------------------------------------------------------

GRAMMAR_BOOLEAN = """
boolean = true / false

true    = %x74.72.75.65     ; true
false   = %x66.61.6C.73.65  ; false
"""

# ---------------------------------------------------------------------------
# Date and time (RFC 3339)
# ---------------------------------------------------------------------------

GRAMMAR_DATETIME = """
date-time      = offset-date-time / local-date-time / local-date / local-time

date-fullyear  = 4DIGIT
date-month     = 2DIGIT  ; 01-12
date-mday      = 2DIGIT  ; 01-28, 01-29, 01-30, 01-31 based on month/year
time-delim     = "T" / %x20 ; T, t, or space
time-hour      = 2DIGIT  ; 00-23
time-minute    = 2DIGIT  ; 00-59
time-second    = 2DIGIT  ; 00-58, 00-59, 00-60 based on leap second rules
time-secfrac   = "." 1*DIGIT
time-numoffset = ( "+" / "-" ) time-hour ":" time-minute
time-offset    = "Z" / time-numoffset

partial-time   = time-hour ":" time-minute ":" time-second [ time-secfrac ]
full-date      = date-fullyear "-" date-month "-" date-mday
full-time      = partial-time time-offset

offset-date-time = full-date time-delim full-time
local-date-time = full-date time-delim partial-time
local-date = full-date
local-time = partial-time
"""

# ---------------------------------------------------------------------------
# Array
# ---------------------------------------------------------------------------

GRAMMAR_ARRAY = """
array = array-open [ array-values ] ws-comment-newline array-close

array-open =  %x5B ; [
array-close = %x5D ; ]

array-values =  ws-comment-newline val ws-comment-newline array-sep array-values
array-values =/ ws-comment-newline val ws-comment-newline [ array-sep ]

array-sep = %x2C  ; , Comma

ws-comment-newline = *( wschar / [ comment ] newline )
"""

# ---------------------------------------------------------------------------
# Document (line driver)
# ---------------------------------------------------------------------------

GRAMMAR_DOCUMENT = """
toml = expression *( newline expression )

expression =  ws [ comment ]
expression =/ ws keyval ws [ comment ]

; Table headers ( std-table / array-table ) are not part of this grammar.
"""

# ---------------------------------------------------------------------------
# Full grammar as one string (for documentation / tooling consumers)
# ---------------------------------------------------------------------------

FULL_GRAMMAR: str = "\n".join([
    "; TOML value grammar (ABNF)",
    "; ==========================",
    "",
    "; Document",
    GRAMMAR_DOCUMENT,
    "; Whitespace, newline, comment",
    GRAMMAR_COMMON,
    "; Key-value pairs",
    GRAMMAR_KEYVAL,
    "; Strings",
    GRAMMAR_STRING,
    "; Integer and float",
    GRAMMAR_NUMBER,
    "; Boolean",
    GRAMMAR_BOOLEAN,
    "; Date and time",
    GRAMMAR_DATETIME,
    "; Array",
    GRAMMAR_ARRAY,
])

# Order in which ``val`` tries its alternatives.  Float precedes integer
# because both start with a decimal integer part.
VALUE_ALTERNATIVE_ORDER: list[str] = [
    "string",
    "boolean",
    "date-time",
    "float",
    "integer",
    "array",
]

# Order in which ``string`` tries its alternatives.  The multiline forms
# come first so a triple quote is not read as an empty single-line string.
STRING_ALTERNATIVE_ORDER: list[str] = [
    "ml-basic-string",
    "basic-string",
    "ml-literal-string",
    "literal-string",
]
