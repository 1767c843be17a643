"""
Gong End-to-End Example

Walks one program through the front end:
1. Scan source text into tokens
2. Parse tokens into expressions
3. Print the expressions back and read them again
4. Show how lexical and syntax errors surface

Run: pip install -e . && python examples/e2e/e2e.py
"""

from gong import ParseError, format_program, parse, read, scan

print("=== Gong E2E Demo ===\n")

source = """(define (greet name)
  (print "hello, \\"" name "\\""))
'(0x1F 0b101 2.5 true)"""

# 1. Scan
tokens = scan(source)
print(f"1. Scanned {len(tokens)} tokens")
for tok in tokens[:6]:
    print(f"   {tok}")
print("   ...\n")

# 2. Parse
exprs = parse(tokens)
print(f"2. Parsed {len(exprs)} top-level forms")
for expr in exprs:
    print(f"   {type(expr).__name__}: {expr}")
print()

# 3. Round trip
printed = format_program(exprs)
again = read(printed)
print("3. Printed and re-read")
print(f"   Same tree: {again == exprs}\n")

# 4. Errors
bad = scan('(x 1.2.3 "open')
print("4. Lexical errors stay on the tokens")
for tok in bad:
    if not tok.ok:
        print(f"   {tok}")
try:
    read("(define x")
except ParseError as e:
    print(f"   Syntax error: {e}")

print("\n=== Demo Complete ===")
