import string

WHITESPACE = string.whitespace

# characters that end a symbol besides whitespace
SPECIAL_CHARS = "'()#\""

SYMBOL_EXCLUDED = WHITESPACE + SPECIAL_CHARS

DIGITS = string.digits

DOT = '.'

QUOTE = 'quote'

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

# radix -> number of digits in 2 ** 63, the longest magnitude a 64-bit literal can have
INT64_DIGITS = {
    2: 64,
    8: 22,
    10: 19,
    16: 16,
}

# escape letter -> character
ESCAPES = {
    'a': '\x07',
    'b': '\x08',
    'n': '\n',
    'r': '\r',
    't': '\t',
    '"': '"',
    '\\': '\\',
    '|': '|',
}

# character -> escape letter, used by the printer
# '|' is readable as an escape but printed verbatim
PRINT_ESCAPES = {char: letter for letter, char in ESCAPES.items() if letter != '|'}

RADIX_DIGITS = {
    'b': (2, '01'),
    'o': (8, string.octdigits),
    'd': (10, DIGITS),
    'x': (16, string.hexdigits),
}

RADIX_NAMES = {
    2: 'binary',
    8: 'octal',
    10: 'decimal',
    16: 'hexadecimal',
}

TRUE_LITERAL = '#t'
FALSE_LITERAL = '#f'
