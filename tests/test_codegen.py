import shutil
import subprocess

import pytest

from squirrel.builtins import global_environment
from squirrel.codegen import codegen, serialize
from squirrel.codegen.codegen import mangle
from squirrel.codegen.js_ast import (
    AnonymousFunction,
    ArrayLiteral,
    Assignment,
    BinaryOp,
    Call,
    Conditional,
    Identifier,
    Literal,
    SequenceExpression,
)
from squirrel.errors import CodegenUnsupportedError, SquirrelTypeError
from squirrel.evaluation.evaluator import evaluate
from squirrel.printer import to_string
from squirrel.reader.parser import parse
from squirrel.types.nodes import List


def compile_js(source):
    return serialize(codegen(parse(source)))


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1", "1"),
        ("-1", "-1"),
        ("0.1", "0.1"),
        ('"string"', '"string"'),
        ('"say \\"hi\\""', '"say \\"hi\\""'),
        ("true", "true"),
        ("false", "false"),
        ("foo-bar", "foo_bar"),
        ("(add 1 2)", "1 + 2"),
        ("(sub 3 2)", "3 - 2"),
        ("(mul 2 3)", "2 * 3"),
        ("(div 6 3)", "6 / 3"),
        ("(mod 7 3)", "7 % 3"),
        ("(pow 2 3)", "2 ** 3"),
        ("(eq 1 2)", "1 === 2"),
        ("(neq 1 2)", "1 !== 2"),
        ("(lte 1 2)", "1 <= 2"),
        ("(add 1 (add 1 1))", "1 + (1 + 1)"),
        ("(sub (sub 5 2) 1)", "(5 - 2) - 1"),
        ("(pow -2 2)", "(-2) ** 2"),
        ("(mul -1 -1)", "(-1) * (-1)"),
        ("[1 2 3]", "[1, 2, 3]"),
        ("[]", "[]"),
        ("(list 1 (add 1 1))", "[1, (1 + 1)]"),
        ("(vector)", "[]"),
        ("(do 1 2 3)", "(1, 2, 3)"),
        ("(do 1)", "1"),
        ("(if (lt 0 1) 1 2)", "(0 < 1) ? 1 : 2"),
        ("(lambda (x y) (add x y))", "(x, y) => (x + y)"),
        ("(lambda [] 1)", "() => 1"),
        ("((lambda (x) x) 1)", "((x) => x)(1)"),
        ("((do add) 1 2)", "((a, b) => (a + b))(1, 2)"),
        ("(f (do 1 2))", "f((1, 2))"),
        ("(quote 5)", "5"),
        ("(def x 1)", "((x) => (x = 1))()"),
        ("(do (def x 1) (set x 2) x)", "((x) => ((x = 1), (x = 2), x))()"),
        ("(lambda (new) new)", "($new) => $new"),
        ("-0", "-0"),
        ("(div 1 -0)", "1 / (-0)"),
        ("(lambda [] (do (def add 1) add))", "() => ((add) => ((add = 1), add))(((a, b) => (a + b)))"),
        ("(lambda (x) (lambda [] (def x 2)))", "(x) => (() => ((x) => (x = 2))(x))"),
        (
            "(do (def y 1) (def add sub))",
            "((add, y) => ((y = 1), (add = ((a, b) => (a - b)))))(((a, b) => (a + b)))",
        ),
    ]
)
def test_serialized_output(source, expected):
    assert compile_js(source) == expected


def test_codegen_builds_target_nodes():
    tree = codegen(parse("(do (add 1 2) [true] (if false 1 2) (g 1))"))
    assert tree == SequenceExpression((
        BinaryOp("+", Literal(1.0), Literal(2.0)),
        ArrayLiteral((Literal(True),)),
        Conditional(Literal(False), Literal(1.0), Literal(2.0)),
        Call(Identifier("g"), (Literal(1.0),)),
    ))


def test_defs_are_declared_per_scope():
    tree = codegen(parse("(do (def f (lambda (n) (do (def m n) m))) (f 1))"))
    assert isinstance(tree, Call) and tree.args == ()
    outer = tree.callee
    assert isinstance(outer, AnonymousFunction)
    assert outer.params == ("f",)
    assign = outer.body.expressions[0]
    assert isinstance(assign, Assignment)
    inner = assign.value
    assert inner.params == ("n",)
    # the lambda body gets its own declaration wrapper for m
    assert inner.body.callee.params == ("m",)


def test_def_of_parameter_is_not_redeclared():
    assert compile_js("(lambda (x) (def x 2))") == "(x) => (x = 2)"


def test_locally_bound_builtin_name_is_a_plain_call():
    assert compile_js("((lambda (add) (add 1 2)) g)") == "((add) => add(1, 2))(g)"


@pytest.mark.parametrize(
    "source",
    [
        "'(add 1 2)",
        "'foo",
        '{"a" 1}',
        "(length [1])",
        '(nth [1] 0)',
        '(print 1)',
        '(parse-integer "1")',
        "(concat [1] [2])",
        "length",
        "list",
        "(add 1)",
        "(if true 1)",
        "(do)",
        '(def "x" 1)',
        "(1 2)",
        "(def list 1)",
        "(lambda [] (def length 1))",
        "(do (def x 1) (def f (lambda [] (do (set x 5) (def x 2) x))) (f))",
    ]
)
def test_unsupported_forms(source):
    with pytest.raises(CodegenUnsupportedError):
        codegen(parse(source))


def test_bad_lambda_parameters_match_evaluator():
    with pytest.raises(SquirrelTypeError):
        codegen(parse('(lambda ("x") x)'))


def test_codegen_does_not_evaluate():
    # unbound names are fine: nothing runs
    assert compile_js("(undefined-fn 1)") == "undefined_fn(1)"


def test_mangle_is_injective_for_symbols():
    assert mangle("a-b") == "a_b"
    assert mangle("class") == "$class"
    assert mangle("ab") != mangle("a-b")


# -------------------------------
# Cross-backend equivalence
# -------------------------------
NODE = shutil.which("node")

RENDER_JS = (
    "const render = (v) => Array.isArray(v) ? '[' + v.map(render).join(' ') + ']'"
    " : typeof v === 'string' ? JSON.stringify(v) : String(v);\n"
)


def as_vectors(value):
    # JavaScript has only arrays, so list flavor is not compared
    if isinstance(value, List):
        return List([as_vectors(e) for e in value], vector=True)
    return value


def run_js(code):
    script = RENDER_JS + f"console.log(render({code}));"
    done = subprocess.run([NODE, "-e", script], capture_output=True, text=True, check=True, timeout=30)
    return done.stdout.rstrip("\n")


@pytest.mark.skipif(NODE is None, reason="node is not installed")
@pytest.mark.parametrize(
    "source",
    [
        "1",
        "-1",
        "0.1",
        "-0.1",
        '"string"',
        "true",
        "false",
        "(add 1 2)",
        "(sub 3 2)",
        "(mul 2 3)",
        "(div 6 3)",
        "(mod 7 3)",
        "(mod -7 3)",
        "(pow 2 3)",
        "(pow -2 2)",
        "(pow 2 0.5)",
        "(add 1 (add 1 1))",
        "(div 1 3)",
        "(div 1 0)",
        "(mul 0.1 3)",
        "(eq 1 1)",
        "(lt 1 0)",
        "(if (lt 0 1) 1 2)",
        "[1 2 3]",
        '[(add 1 2) true "x" []]',
        "(vector 1 (vector 2))",
        "((do add) 1 2)",
        "((lambda (x y) (add x y)) 1 2)",
        "(do (def x 1) ((lambda (y) (add x y)) 2))",
        "(do (def x 1) ((lambda (x y) (add x y)) 2 2))",
        "(do (def square (lambda (x) (mul x x))) (square 3))",
        "(do (def factorial (lambda (x) (if (eq x 0) 1 (mul x (factorial (sub x 1)))))) (factorial 4))",
        "(do (def pi 3.14) (set pi 3.142) pi)",
        "(do (def n 0) (def inc (lambda [] (set n (add n 1)))) (inc) (inc) n)",
        "((lambda (x) (do (def y (mul x 2)) (add y 1))) 5)",
        "(do (def x 1) ((lambda [] (do (def x 2) x))) x)",
        "(do (def x 1) ((lambda [] (do (def x (add x 1)) x))))",
        "(do (def x 1) ((lambda [] (do (if false (def x 2) 0) x))))",
        "((lambda [] (do (def y (add 1 2)) (def add (lambda (a b) (mul a b))) (add y 2))))",
        "(do (def r (add 1 2)) (def add sub) (add r 1))",
        "-0",
        "(div 1 -0)",
        "(pow 0 -1)",
        "(pow -0 -1)",
        "(pow 1 (div 0 0))",
        "(list 1 2)",
        "(list)",
        "(list 1 (list 2 3) [4])",
    ]
)
def test_cross_backend_equivalence(source):
    expected = to_string(as_vectors(evaluate(parse(source), global_environment())))
    assert run_js(compile_js(source)) == expected
