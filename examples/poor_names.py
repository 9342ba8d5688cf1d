"""
Example file with intentional naming and complexity problems for testing.

Run: methodlint scan examples/poor_names.py
"""


def do(x1):
    return x1


def load_rows(source, _):
    return [row for row in source]


def summarise(values):
    x = 0
    for value in values:
        if value > 10:
            x += 1
        elif value < 0:
            x -= 1
    return foo(x)


def foo(count):
    return count
