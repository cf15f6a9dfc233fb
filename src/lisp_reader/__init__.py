from pathlib import Path
__version__ = Path(__file__).parent.joinpath('VERSION').open().read().rstrip()


from .reader import StreamReader, InputSourceError
from .grammar import parse, read_all, Parser, Complete, Incomplete, Invalid, INCOMPLETE, ReadSyntaxError, \
    IncompleteDatum
from .datum import Datum, Nil, NIL, Boolean, Integer, Symbol, Text, Vector, Pair, make_list, print_datum
from .constants import *
