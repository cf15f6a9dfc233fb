import pytest

from lisp_reader import NIL, Boolean, Integer, Symbol, Text, Vector, Pair, make_list, print_datum, parse, \
    Complete, INT64_MIN, INT64_MAX


def test_print_atoms():
    assert print_datum(NIL) == '()'
    assert print_datum(Boolean(True)) == '#t'
    assert print_datum(Boolean(False)) == '#f'
    assert print_datum(Integer(42)) == '42'
    assert print_datum(Integer(-7)) == '-7'
    assert print_datum(Symbol('hello-world')) == 'hello-world'


def test_print_text():
    assert print_datum(Text('plain')) == '"plain"'
    assert print_datum(Text('say "hi"\\')) == r'"say \"hi\"\\"'
    assert print_datum(Text('a\nb\tc')) == r'"a\nb\tc"'
    assert print_datum(Text('|')) == '"|"'
    assert print_datum(Text('')) == '""'


def test_print_vector():
    assert print_datum(Vector()) == '#()'
    assert print_datum(Vector([Integer(1), Integer(2)])) == '#(1 2)'
    assert print_datum(Vector([Vector(), make_list(Symbol('a'))])) == '#(#() (a))'


def test_print_pair():
    assert print_datum(make_list(Integer(1), Integer(2), Integer(3))) == '(1 2 3)'
    assert print_datum(Pair(Symbol('a'), Symbol('b'))) == '(a . b)'
    assert print_datum(make_list(Integer(1), Integer(2), tail=Integer(3))) == '(1 2 . 3)'
    assert print_datum(make_list(NIL, make_list(Symbol('quote'), Symbol('x')))) == '(() (quote x))'


def test_print_long_list():
    datum = Pair.from_list(Integer(i) for i in range(10000))
    assert print_datum(datum) == '(' + ' '.join(str(i) for i in range(10000)) + ')'


def test_str():
    datum = make_list(Symbol('a'), Vector([Boolean(False)]), Text('b'))
    assert str(datum) == print_datum(datum) == '(a #(#f) "b")'


def test_symbol_invariants():
    with pytest.raises(ValueError):
        Symbol('')
    with pytest.raises(ValueError):
        Symbol('.')
    assert Symbol('..').name == '..'


def test_integer_range():
    assert Integer(INT64_MAX).value == 2 ** 63 - 1
    assert Integer(INT64_MIN).value == -2 ** 63
    with pytest.raises(ValueError):
        Integer(2 ** 63)
    with pytest.raises(ValueError):
        Integer(-2 ** 63 - 1)
    with pytest.raises(TypeError):
        Integer(True)


def test_boolean_type():
    with pytest.raises(TypeError):
        Boolean(1)


def test_from_list():
    assert Pair.from_list([]) is NIL
    assert Pair.from_list([], Symbol('a')) == Symbol('a')
    datum = Pair.from_list([Integer(1), Integer(2)], Symbol('tail'))
    assert datum == Pair(Integer(1), Pair(Integer(2), Symbol('tail')))
    assert datum.to_list() == ([Integer(1), Integer(2)], Symbol('tail'))
    assert datum.is_proper is False
    assert make_list(Integer(1)).is_proper is True
    assert list(make_list(Integer(1), Integer(2))) == [Integer(1), Integer(2)]


def test_equality():
    assert make_list(Integer(1), Vector([Text('x')])) == make_list(Integer(1), Vector([Text('x')]))
    assert make_list(Integer(1), Integer(2)) != make_list(Integer(1))
    assert make_list(Integer(1)) != Pair(Integer(1), Integer(2))
    assert Boolean(True) != Integer(1)
    assert Symbol('a') != Text('a')
    assert NIL == make_list()
    assert Vector([Integer(1)]) != make_list(Integer(1))


def test_vector_fixed_length():
    vector = Vector([Integer(1), Symbol('b')])
    assert len(vector) == 2
    assert vector[1] == Symbol('b')
    assert isinstance(vector.items, tuple)


round_trip_cases = [
    NIL,
    Boolean(True),
    Integer(INT64_MIN),
    Integer(INT64_MAX),
    Symbol('+'),
    Symbol('a;b'),
    Text('tab\there "quoted" back\\slash bell\x07 bs\x08 cr\r |bar|'),
    Vector(),
    Vector([Integer(1), Text('two'), Vector([Symbol('three')])]),
    make_list(Symbol('quote'), Symbol('a')),
    make_list(Integer(1), make_list(Integer(2), tail=Integer(3)), tail=Symbol('rest')),
    make_list(NIL, Boolean(False), Vector([make_list()])),
]


@pytest.mark.parametrize('datum', round_trip_cases)
def test_round_trip(datum):
    result = parse(print_datum(datum) + '\n')
    assert isinstance(result, Complete)
    assert result.datum == datum
    assert result.rest == '\n'
