import pytest

from mankai.errors import ArityError, ArgumentTypeError, EmptyListError
from mankai.builtin import env_builtin
from mankai.types.function import NativeFunction
from mankai.types.value import Number, String, Bool, List, TRUE, FALSE


def nums(*xs):
    return List([Number(x) for x in xs])


# -------------------------------
# Lists
# -------------------------------
def test_car_and_cdr(run):
    assert run("(car (list 1 2 3))") == Number(1)
    assert run("(cdr (list 1 2 3))") == nums(2, 3)
    assert run("(cdr (list 1))") == List([])
    assert run("(car (cdr (list 1 2 3)))") == Number(2)


@pytest.mark.parametrize("name", ["car", "cdr"])
def test_car_cdr_empty_list(run, name):
    with pytest.raises(EmptyListError, match="can't apply to empty list"):
        run(f"({name} (list))")


@pytest.mark.parametrize("name", ["car", "cdr"])
def test_car_cdr_contract(run, name):
    with pytest.raises(ArgumentTypeError) as excinfo:
        run(f"({name} 5)")
    assert excinfo.value.position == 1
    assert excinfo.value.expected == "list"
    with pytest.raises(ArityError):
        run(f"({name} (list 1) (list 2))")


def test_cdr_returns_a_new_list(interp, run):
    run("(set! xs (list 1 2 3))")
    run("(set! ys (cdr xs))")
    assert run("xs") == nums(1, 2, 3)
    assert run("ys") == nums(2, 3)


def test_cons_appends_to_the_end(run):
    assert run("(cons (list 1) 2 3)") == nums(1, 2, 3)
    assert run("(cons (list) (list 1))") == List([nums(1)])


def test_cons_leaves_its_argument_alone(run):
    run("(set! xs (list 1))")
    run("(cons xs 2)")
    assert run("xs") == nums(1)


def test_cons_contract(run):
    with pytest.raises(ArityError, match="at least 2 arguments"):
        run("(cons (list 1))")
    with pytest.raises(ArgumentTypeError) as excinfo:
        run("(cons 1 2)")
    assert excinfo.value.position == 1


def test_list_is_variadic_and_untyped(run):
    assert run("(list)") == List([])
    assert run('(list 1 "a" true (list 2))') == List([Number(1), String("a"), TRUE, nums(2)])


def test_length_and_empty(run):
    assert run("(length (list 1 2 3))") == Number(3)
    assert run("(length (list))") == Number(0)
    assert run("(empty? (list))") == TRUE
    assert run("(empty? (list 1))") == FALSE
    with pytest.raises(ArgumentTypeError):
        run('(empty? "abc")')


# -------------------------------
# Boolean logic
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ("(and true true)", True),
        ("(and true false)", False),
        ("(and true)", True),
        ("(and false 1)", False),  # stops at the first false
        ("(or false true)", True),
        ("(or false false)", False),
        ("(or true 1)", True),  # stops at the first true
        ("(not true)", False),
        ("(not false)", True),
    ]
)
def test_boolean_logic(run, source, expected):
    assert run(source) == Bool(expected)


@pytest.mark.parametrize(
    "source,position",
    [
        ("(and true 1)", 2),
        ('(or false "x")', 2),
        ("(and 0)", 1),
        ("(not 1)", 1),
    ]
)
def test_boolean_type_errors(run, source, position):
    with pytest.raises(ArgumentTypeError) as excinfo:
        run(source)
    assert excinfo.value.position == position
    assert excinfo.value.expected == "boolean"


@pytest.mark.parametrize("source", ["(and)", "(or)", "(not)", "(not true false)"])
def test_boolean_arity(run, source):
    with pytest.raises(ArityError):
        run(source)


# -------------------------------
# Type predicates
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ("(bool? true)", True),
        ("(bool? 1)", False),
        ("(list? (list 1))", True),
        ("(list? (list))", True),
        ('(list? "()")', False),
        ("(number? 1.5)", True),
        ('(number? "1")', False),
        ('(string? "s")', True),
        ("(string? +)", False),
        ("(number? (lambda! (x) x))", False),
    ]
)
def test_predicates(run, source, expected):
    assert run(source) == Bool(expected)


@pytest.mark.parametrize("name", ["bool?", "list?", "number?", "string?"])
def test_predicates_take_exactly_one_argument(run, name):
    with pytest.raises(ArityError, match="exactly 1 argument"):
        run(f"({name})")
    with pytest.raises(ArityError):
        run(f"({name} 1 2)")


# -------------------------------
# Strings
# -------------------------------
def test_string_concat(run):
    assert run('(string-concat "foo" "bar" "")') == String("foobar")
    assert run('(string-concat "x")') == String("x")
    with pytest.raises(ArgumentTypeError) as excinfo:
        run('(string-concat "a" 1)')
    assert excinfo.value.position == 2
    with pytest.raises(ArityError):
        run("(string-concat)")


@pytest.mark.parametrize(
    "source,expected",
    [
        ('(to-string "x")', "x"),
        ("(to-string 3)", "3"),
        ("(to-string 0.5)", "0.5"),
        ("(to-string true)", "true"),
        ('(to-string (list 1 "a"))', '(1 "a")'),
        ("(to-string +)", "<native function>"),
        ("(to-string if!)", "<special form>"),
        ("(to-string (lambda! (x) x))", "<user-defined function>"),
    ]
)
def test_to_string(run, source, expected):
    assert run(source) == String(expected)


def test_to_string_is_idempotent(run):
    assert run('(to-string (to-string (to-string "q")))') == String("q")


# -------------------------------
# Registration and direct calls
# -------------------------------
def test_register_binds_every_native_and_constant(interp):
    for name in env_builtin.NATIVE_FUNCTIONS:
        value = interp.env.lookup(name)
        assert isinstance(value, NativeFunction)
        assert value.name == name
    assert interp.env.lookup("true") == TRUE
    assert interp.env.lookup("false") == FALSE


def test_natives_are_plain_functions_over_values():
    assert env_builtin.add([Number(1), Number(2)]) == Number(3)
    assert env_builtin.cdr([nums(1, 2)]) == nums(2)
    assert env_builtin.to_string([nums(1)]) == String("(1)")
