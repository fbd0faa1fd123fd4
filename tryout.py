from calcline.errors import CalcError
from calcline.evaluator import evaluate
from calcline.tokenizer import TokenizerError, tokenize

for code in [
    "5",
    "-1",
    "1 + 1",
    "-1 + 1",
    "1 + -1",
    "4 + 6 * 3",
    "(4 + 6)",
    "(4+6) * 3",
    "80225/+2",
    "7/6/2000",
    "8 - 3 - 2",
    "1 / 0",
    "2 % 3",
    "(1 + 2",
    "--3",
    "3.5",
]:
    print("=" * 10)
    print(f"code: {code!r}")
    try:
        tokens = tokenize(code)
    except TokenizerError as e:
        print(e)
        continue

    print(f"tokens: {' '.join(str(t) for t in tokens)}")

    try:
        result = evaluate(code)
    except CalcError as e:
        print(f"error: {e}")
        continue
    print(f"result: {result}")
