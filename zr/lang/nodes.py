"""Abstract syntax tree for the zr language. Nodes are built bottom-up by the parser and only read by the evaluator.

Every node remembers where it starts (line, column) so that runtime errors can point back into the source. Position
is not part of node equality: two trees are equal when they have the same shape and contents.
"""

from zr.lang.values import ValueType


class Node:
    """Superclass of every AST node. Subclasses list their own fields in FIELDS."""
    FIELDS = ()

    def __init__(self, line=None, column=None):
        self.line = line
        self.column = column
        self._cls = type(self).__name__

    @property
    def kind(self):
        """Name used for evaluator dispatch."""
        return self._cls.lower()

    def fields(self):
        return tuple(getattr(self, field) for field in self.FIELDS)

    def display(self, indents=0):
        """Recursively displays tree with readable format."""
        result = f"{'    ' * indents}{self._cls}("
        children = []
        for field, value in zip(self.FIELDS, self.fields()):
            if isinstance(value, Node):
                children.append(f"{'    ' * (indents + 1)}{field}=\n{value.display(indents + 2)}")
            elif isinstance(value, list):
                items = "".join(f"\n{item.display(indents + 2)}," for item in value)
                children.append(f"{'    ' * (indents + 1)}{field}=[{items}]")
            else:
                children.append(f"{'    ' * (indents + 1)}{field}={value!r}")
        if children:
            result += "\n" + ",\n".join(children) + "\n" + "    " * indents
        return result + ")"

    def __repr__(self):
        return f"{self._cls}({', '.join(repr(value) for value in self.fields())})"

    def __eq__(self, other):
        return type(other) is type(self) and other.fields() == self.fields()


class NumberLiteral(Node):
    """Numeric literal. text is the raw lexeme; data_type is INT64 or FLOAT depending on whether it contains a '.'."""
    FIELDS = ("text", "data_type")

    def __init__(self, text, data_type=None, **kwargs):
        super().__init__(**kwargs)
        self.text = text
        if data_type is None:
            data_type = ValueType.FLOAT if "." in text else ValueType.INT64
        self.data_type = data_type


class StringLiteral(Node):
    FIELDS = ("value",)

    def __init__(self, value, **kwargs):
        super().__init__(**kwargs)
        self.value = value


class BoolLiteral(Node):
    FIELDS = ("value",)

    def __init__(self, value, **kwargs):
        super().__init__(**kwargs)
        self.value = value


class Identifier(Node):
    FIELDS = ("name",)

    def __init__(self, name, **kwargs):
        super().__init__(**kwargs)
        self.name = name


class BinaryOp(Node):
    """left op right. Positioned at the operator."""
    FIELDS = ("op", "left", "right")

    def __init__(self, op, left, right, **kwargs):
        super().__init__(**kwargs)
        self.op = op
        self.left = left
        self.right = right


class Let(Node):
    """let name (: declared_type)? = initializer. declared_type is a ValueType or None."""
    FIELDS = ("name", "declared_type", "initializer")

    def __init__(self, name, declared_type, initializer, **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.declared_type = declared_type
        self.initializer = initializer


class If(Node):
    """else_body is None when there is no else branch."""
    FIELDS = ("condition", "then_body", "else_body")

    def __init__(self, condition, then_body, else_body=None, **kwargs):
        super().__init__(**kwargs)
        self.condition = condition
        self.then_body = then_body
        self.else_body = else_body


class Block(Node):
    FIELDS = ("statements",)

    def __init__(self, statements=None, **kwargs):
        super().__init__(**kwargs)
        self.statements = statements if statements is not None else []


class Print(Node):
    FIELDS = ("operand",)

    def __init__(self, operand, **kwargs):
        super().__init__(**kwargs)
        self.operand = operand


class LoadModule(Node):
    """loadin "name". Handled by the session before evaluation, never evaluated itself."""
    FIELDS = ("name",)

    def __init__(self, name, **kwargs):
        super().__init__(**kwargs)
        self.name = name


# reserved: the lexer knows their keywords but the parser never builds them


class UnaryOp(Node):
    FIELDS = ("op", "operand")

    def __init__(self, op, operand, **kwargs):
        super().__init__(**kwargs)
        self.op = op
        self.operand = operand


class While(Node):
    FIELDS = ("condition", "body")

    def __init__(self, condition, body, **kwargs):
        super().__init__(**kwargs)
        self.condition = condition
        self.body = body


class FuncDecl(Node):
    FIELDS = ("name", "params", "body")

    def __init__(self, name, params, body, **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.params = params
        self.body = body


class Call(Node):
    FIELDS = ("name", "args")

    def __init__(self, name, args, **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.args = args


class Return(Node):
    FIELDS = ("value",)

    def __init__(self, value, **kwargs):
        super().__init__(**kwargs)
        self.value = value
