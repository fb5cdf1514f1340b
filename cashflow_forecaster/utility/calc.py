""" A safe evaluator for arithmetic typed into amount fields.

Users often enter amounts as sums (e.g. `"1200 + 350.50"` or
`"4350*26/12"`). `evaluate_expression` handles `+ - * /`, parentheses,
unary minus and decimal numbers with a recursive-descent parser over
`Decimal`, never `eval`.

Grammar:
    expression = term (('+' | '-') term)*
    term       = factor (('*' | '/') factor)*
    factor     = '-' factor | '(' expression ')' | number
"""

import re
from decimal import Decimal, DecimalException, DefaultContext
from cashflow_forecaster.money import round_cents

_ALLOWED = re.compile(r'^[\d.+\-*/()]+$')
_NUMBER = re.compile(r'\d*\.?\d*')

# Deeper nesting (of parentheses or unary minus) is refused rather than
# exhausting the interpreter's recursion limit.
MAX_DEPTH = 100
# A typed number can't have more significant digits than `Decimal`
# holds exactly.
MAX_DIGITS = DefaultContext.prec

class ExpressionError(ValueError):
    """ Raised by `parse_expression` for malformed expressions. """

class _Parser(object):
    """ Parses one whitespace-free expression string. """

    def __init__(self, text):
        self.text = text
        self.pos = 0
        self.depth = 0

    def peek(self):
        return self.text[self.pos] if self.pos < len(self.text) else ''

    def consume(self):
        char = self.peek()
        self.pos += 1
        return char

    def parse(self):
        result = self.expression()
        if self.pos != len(self.text):
            raise ExpressionError(
                'unexpected ' + repr(self.peek()) + ' at ' + str(self.pos))
        return result

    def expression(self):
        result = self.term()
        while self.peek() in ('+', '-'):
            if self.consume() == '+':
                result = result + self.term()
            else:
                result = result - self.term()
        return result

    def term(self):
        result = self.factor()
        while self.peek() in ('*', '/'):
            operator = self.consume()
            right = self.factor()
            if operator == '*':
                result = result * right
            elif right == 0:
                raise ExpressionError('division by zero')
            else:
                result = result / right
        return result

    def factor(self):
        if self.peek() in ('-', '('):
            self.depth += 1
            if self.depth > MAX_DEPTH:
                raise ExpressionError('expression is nested too deeply')
            try:
                return self.nested()
            finally:
                self.depth -= 1
        return self.number()

    def nested(self):
        if self.consume() == '-':
            return -self.factor()
        result = self.expression()
        if self.consume() != ')':
            raise ExpressionError('unbalanced parentheses')
        return result

    def number(self):
        match = _NUMBER.match(self.text, self.pos)
        digits = match.group(0)
        if not any(char.isdigit() for char in digits):
            raise ExpressionError('expected a number at ' + str(self.pos))
        integer, _, fraction = digits.partition('.')
        significant = (integer + fraction.rstrip('0')).lstrip('0')
        if len(significant) > MAX_DIGITS:
            raise ExpressionError(
                'number at ' + str(self.pos) + ' has too many digits')
        self.pos = match.end()
        return Decimal(digits)

def parse_expression(text):
    """ Evaluates `text` exactly, without rounding.

    Raises:
        ExpressionError: `text` is not a valid expression, is nested
            more than `MAX_DEPTH` deep, has a number with more than
            `MAX_DIGITS` significant digits, or overflows `Decimal`.
    """
    expression = re.sub(r'\s', '', text)
    if not expression or not re.search(r'\d', expression):
        raise ExpressionError('expression has no numbers')
    if not _ALLOWED.match(expression):
        raise ExpressionError('expression has disallowed characters')
    try:
        return _Parser(expression).parse()
    except DecimalException as error:
        raise ExpressionError(str(error)) from error

def evaluate_expression(text):
    """ Evaluates `text`, rounded to cents, or returns None if invalid.

    Examples:
        evaluate_expression('1200 + 350.50')  # Decimal('1550.50')
        evaluate_expression('100/3')  # Decimal('33.33')
        evaluate_expression('2 ** 3')  # None
    """
    try:
        return round_cents(parse_expression(text))
    except ExpressionError:
        return None
