"""Differential fuzzing against Python's eval, run from project root until interrupted.

Expressions are generated from the calculator's own grammar, so every one of
them must evaluate; a mangled copy of each is then fed in to check that broken
input only ever surfaces as a CalcError.
"""
import math
import random
import string

from calcline.errors import CalcError
from calcline.evaluator import evaluate

ALPHABET = string.digits + "()+-*/% "


def gen_primary(depth: int) -> str:
    if depth > 0 and random.random() < 0.3:
        return "(" + gen_additive(depth - 1) + ")"
    # no leading zeros: python refuses them in int literals
    return str(random.randint(0, 999))


def gen_unary(depth: int) -> str:
    # a sign takes a primary, never another sign
    sign = random.choice(["", "", "", "-", "+"])
    return sign + gen_primary(depth)


def gen_fold(depth: int, operators: str, gen_term) -> str:
    terms = [gen_term(depth) for _ in range(random.randint(1, 3))]
    result = terms[0]
    for term in terms[1:]:
        result += random.choice(["", " "]) + random.choice(operators) + random.choice(["", " "]) + term
    return result


def gen_multiplicative(depth: int) -> str:
    return gen_fold(depth, "*/", gen_unary)


def gen_additive(depth: int) -> str:
    return gen_fold(depth, "+-", gen_multiplicative)


def mangle(code: str) -> str:
    idx = random.randrange(len(code) + 1)
    return code[:idx] + random.choice(ALPHABET + ".x") + code[idx + 1 :]


def eval_py(code: str) -> float | None:
    try:
        return float(eval(code))
    except ZeroDivisionError:
        return None


if __name__ == "__main__":
    while True:
        code = gen_additive(depth=3)

        res_py = eval_py(code)
        res_my = evaluate(code)
        if res_py is not None and not math.isclose(res_my, res_py, rel_tol=1e-9, abs_tol=1e-9):
            print(f"{code!r}\npy: {res_py}\nmy: {res_my}\n\n")

        broken = mangle(code)
        try:
            evaluate(broken)
        except CalcError:
            pass
        except Exception as e:
            print(f"{broken!r}\nunexpected {e.__class__.__name__}: {e}\n\n")
