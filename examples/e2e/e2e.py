"""
Lisp Reader End-to-End Example (Python)

Demonstrates:
1. Reading single expressions in every literal form
2. Reading a list, nested and dotted lists
3. Reading a whole file of forms
4. Handling parse errors

Run: pip install -e . && python examples/e2e/e2e.py
"""

from pathlib import Path

from lisp_reader import read_expr, read_list, read_all, ParseError, NumberOverflowError

print("=== Lisp Reader E2E Demo ===\n")

# 1. Literals
print("1. Expressions")
for src in [b"123", b"#b11", b"#o321", b"#xFF", b'"1\\"23"', b"symbol", b"#t"]:
    print(f"   {src.decode():<10} -> {read_expr(src)!r}")
print()

# 2. Lists
print("2. Lists")
for src in [b"(1 2 3)", b'(1 2 "Hello World")', b"(a (b c) ())", b"(a b . c)"]:
    tree = read_list(src)
    print(f"   {src.decode():<20} -> {tree}")
print()

# 3. A file of forms
program = Path(__file__).resolve().parent.parent / "data" / "program.scm"
forms = read_all(program.read_bytes())
print(f"3. Read {len(forms)} forms from {program.name}")
for form in forms:
    print(f"   {form}")
print()

# 4. Errors
print("4. Errors")
for src in [b"(1 2", b'"a\\nb"', b"9223372036854775808"]:
    try:
        read_list(src) if src.startswith(b"(") else read_expr(src)
    except NumberOverflowError as e:
        print(f"   {src.decode():<22} overflow: {e}")
    except ParseError as e:
        print(f"   {src.decode():<22} error: {e}")

print("\n=== Done ===")
