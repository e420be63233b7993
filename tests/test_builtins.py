import math

import pytest

from squirrel.builtins import build_namespace, global_environment
from squirrel.errors import ArgumentError, FormatError
from squirrel.evaluation.evaluator import evaluate
from squirrel.printer import to_string
from squirrel.reader.parser import parse
from squirrel.types.native_fn import NativeFunction
from squirrel.types.symbol import Symbol


def run(source, env):
    return to_string(evaluate(parse(source), env))


@pytest.mark.parametrize(
    "source,expected",
    [
        # comparisons return booleans
        ("(eq 0 1)", "false"),
        ("(eq 1 1)", "true"),
        ("(neq 0 1)", "true"),
        ("(neq 1 1)", "false"),
        ("(lt 0 1)", "true"),
        ("(lt 1 0)", "false"),
        ("(lt 1 1)", "false"),
        ("(lte 0 1)", "true"),
        ("(lte 1 0)", "false"),
        ("(lte 1 1)", "true"),
        ("(gt 0 1)", "false"),
        ("(gt 1 0)", "true"),
        ("(gt 1 1)", "false"),
        ("(gte 0 1)", "false"),
        ("(gte 1 0)", "true"),
        ("(gte 1 1)", "true"),
        # arithmetic follows IEEE doubles
        ("(div 1 3)", "0.3333333333333333"),
        ("(mul 0.1 3)", "0.30000000000000004"),
        ("(div 1 0)", "Infinity"),
        ("(div -1 0)", "-Infinity"),
        ("(div 0 0)", "NaN"),
        ("(mod -7 3)", "-1"),
        ("(mod 7 -3)", "1"),
        ("(mod 5.5 2)", "1.5"),
        ("(mod 1 0)", "NaN"),
        ("(pow 2 0.5)", "1.4142135623730951"),
        ("(pow 10 400)", "Infinity"),
        ("(pow -8 0.5)", "NaN"),
        ("(pow 0 -1)", "Infinity"),
        ("(pow -0 -1)", "-Infinity"),
        ("(pow -0 -2)", "Infinity"),
        ("(pow 0 -0.5)", "Infinity"),
        ("(pow -2 1025)", "-Infinity"),
        ("(pow 1 (div 0 0))", "NaN"),
        ("(pow 1 (div 1 0))", "NaN"),
        ("(pow -1 (div -1 0))", "NaN"),
        ("(pow (div 0 0) 0)", "1"),
        # collections
        ("(list 1 2)", "(1 2)"),
        ("(list)", "()"),
        ("(list 'a 'b 'c)", "(a b c)"),
        ("(vector 1 2)", "[1 2]"),
        ("(length [])", "0"),
        ("(length [1 2 3])", "3"),
        ("(length '(a b c))", "3"),
        ('(length "")', "0"),
        ('(length "hi")', "2"),
        ("(nth [1 2 3] 0)", "1"),
        ("(nth [1 2 3] 1)", "2"),
        ("(nth [1 2 3] 2)", "3"),
        ("(nth '(a b c) 1)", "b"),
        ('(nth "hi" 0)', '"h"'),
        ('(nth "hi" 1)', '"i"'),
        ("(slice [1 2 3 4] 1 3)", "[2 3]"),
        ("(slice '(a b c) 0 2)", "(a b)"),
        ('(slice "hello" 1 4)', '"ell"'),
        ("(slice [1 2 3] 2 10)", "[3]"),
        ("(join [1] [2 3])", "[1 2 3]"),
        ("(concat '(a) '(b c))", "(a b c)"),
        ('(concat "a" "b" "c")', '"abc"'),
        ('(join "only")', '"only"'),
        # conversion
        ('(parse-integer "3")', "3"),
        ('(parse-integer "-42")', "-42"),
        ('(parse-integer " 7 ")', "7"),
        ('(parse-float "3.14")', "3.14"),
        ('(parse-float "-2.5e3")', "-2500"),
        ('(parse-float "10")', "10"),
    ]
)
def test_builtin_results(env, source, expected):
    assert run(source, env) == expected


@pytest.mark.parametrize(
    "source",
    [
        "(add 1)",
        "(add 1 2 3)",
        '(add 1 "2")',
        "(add true 1)",
        "(lt 1 'a)",
        "(eq [1] [1])",
        "(length 5)",
        '(nth [1 2] "0")',
        "(nth [1 2] 2)",
        "(nth [1 2] -1)",
        "(nth [1 2] 0.5)",
        '(nth "" 0)',
        "(nth 5 0)",
        "(slice 5 0 1)",
        "(slice [1 2] 0.5 1)",
        '(concat [1] "a")',
        '(concat "a" [1])',
        "(concat 1 2)",
        "(concat)",
        "(parse-integer 3)",
        "(print)",
        "(print 1 2)",
    ]
)
def test_builtin_argument_errors(env, source):
    with pytest.raises(ArgumentError):
        evaluate(parse(source), env)


@pytest.mark.parametrize(
    "source",
    [
        '(parse-integer "3.5")',
        '(parse-integer "abc")',
        '(parse-integer "")',
        '(parse-float "1.")',
        '(parse-float ".5")',
        '(parse-float "nan")',
        '(parse-float "inf")',
        '(parse-float "1,5")',
    ]
)
def test_parse_number_format_errors(env, source):
    with pytest.raises(FormatError):
        evaluate(parse(source), env)


def test_print_writes_canonical_form_and_returns_argument(env, out):
    result = evaluate(parse('(print {"a" [1 "x" true]})'), env)
    assert out.getvalue() == '{"a" [1 "x" true]}\n'
    assert to_string(result) == '{"a" [1 "x" true]}'


def test_print_defaults_to_stdout(capsys):
    env = global_environment()
    evaluate(parse('(print "hi")'), env)
    assert capsys.readouterr().out == '"hi"\n'


def test_namespace_is_immutable():
    namespace = build_namespace()
    with pytest.raises(TypeError):
        namespace[Symbol("add")] = None


def test_namespaces_are_isolated(out):
    other = []

    class Sink:
        def write(self, text):
            other.append(text)

    env_a = global_environment(build_namespace(out))
    env_b = global_environment(build_namespace(Sink()))
    evaluate(parse("(print 1)"), env_b)
    assert out.getvalue() == ""
    assert other == ["1\n"]
    evaluate(parse("(def add 5)"), env_a)
    assert isinstance(env_b.get(Symbol("add")), NativeFunction)


def test_natives_are_callable_directly(env):
    add = env.lookup_or_fail(Symbol("add"))
    assert add([1.0, 2.0]) == 3.0
    assert math.isnan(env.lookup_or_fail(Symbol("mod"))([1.0, 0.0]))


def test_native_renders_by_name(env):
    assert run("add", env) == "<native add>"
    assert run("parse-integer", env) == "<native parse-integer>"
