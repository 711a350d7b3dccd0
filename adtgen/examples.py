"""A catalogue of example declarations covering every generator path.

``adtgen examples --out DIR`` writes the generated module for each entry.
"""

EXAMPLES: dict[str, str] = {
    "Option": "data Option A = None | Some A",
    "Maybe": "data Maybe A = Nothing | Just { value :: A }",
    "Either": "data Either L R = Left L | Right R",
    "These": "data These A B = Left { left :: A } | Right { right :: B } | Both { left :: A, right :: B }",
    "Tree": "data Tree A = Leaf | Node (Tree A) A (Tree A)",
    "FooBar": "data FooBar = Foo | Bar",
    "FooBarBaz": "data FooBarBaz = Foo | Bar | Baz",
    "User": "data User = User { name :: string, surname :: string, age :: number }",
    "NotAlignedNames": "data NotAlignedNames = Ctor { value :: string }",
    "Constrained": "data Constrained (A :: string) = Fetching | GotData A",
    "Tuple2": "data Tuple2 A B = Tuple2 (A, B)",
    "State": "data State S A = State (S -> (A, S))",
    "Writer": "data Writer W A = Writer (() -> (A, W))",
    "Nullary": "data Nullary = Nullary",
}
