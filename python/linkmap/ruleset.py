import logging
from collections import namedtuple

from linkmap import constants
from linkmap import exceptions
from linkmap.template import Template

logger = logging.getLogger(__name__)


class Rule(namedtuple('Rule', 'input output')):
    """ Pair of input and output templates mapping one path shape to a link """

    __slots__ = ()

    def __str__(self):
        return '{} {}'.format(self.input, self.output)

    def match(self, path):
        """
        :param str  path:
        :rtype: dict[str, str]|None
        """
        return self.input.match(path)

    def apply(self, path):
        """
        Renders the output template from the variables matched in the path.

        :raise ParseError: if the path doesn't match the input template
        :raise RenderError: if the output template cannot be rendered
        :param str  path:
        :rtype: str
        """
        return self.output.render(self.input.parse(path))


class RuleSet(object):
    @classmethod
    def from_pairs(cls, pairs):
        """
        Compiles each (input, output) pair of template strings into a Rule.

        :raise CompileError: for the first template that fails to compile,
            naming the side of the rule and the raw text
        :param Iterable[tuple[str, str]]   pairs:
        :rtype: RuleSet
        """
        rules = []
        for input_text, output_text in pairs:
            rules.append(Rule(
                compile_side(constants.KEY_INPUT, input_text),
                compile_side(constants.KEY_OUTPUT, output_text),
            ))
        return cls(rules)

    build = from_pairs

    def __init__(self, rules):
        """
        Rules are ordered by the number of segments in their input template,
        most first, so that more specific rules are tried before general
        ones. Rules of equal length keep their given order.

        :param Iterable[Rule]   rules:
        """
        self._rules = tuple(sorted(rules, key=lambda r: len(r.input), reverse=True))

    def __repr__(self):
        return 'RuleSet({!r})'.format(list(self._rules))

    def __len__(self):
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)

    @property
    def rules(self):
        """
        :rtype: tuple[Rule]
        """
        return self._rules

    def evaluate(self, path):
        """
        Renders the output of the first rule whose input matches the path.
        Later rules are never tried once one has matched, even if rendering
        its output fails.

        :raise NoMatchError: if no rule matches the path
        :raise RenderError: if the matching rule's output cannot be rendered.
            The message is prefixed with "Failed to apply rule '<rule>': "
            and the original RenderError is chained as the cause.
        :param str  path:
        :rtype: str
        """
        found = self.match(path)
        if found is None:
            raise exceptions.NoMatchError('No rule matches path: {!r}'.format(path))

        rule, bindings = found
        logger.debug('Path %r matched rule: %s', path, rule)
        try:
            return rule.output.render(bindings)
        except exceptions.RenderError as e:
            raise exceptions.RenderError(
                'Failed to apply rule {!r}: {}'.format(str(rule), e)
            ) from e

    def match(self, path):
        """
        :param str  path:
        :return: Tuple of the first matching rule and its variables, or None
        :rtype: tuple[Rule, dict[str, str]]|None
        """
        for rule in self._rules:
            bindings = rule.input.match(path)
            if bindings is not None:
                return rule, bindings
        return None

    def validate(self, raise_error=True):
        """
        Finds all rules whose output can never be rendered, ie, it uses a
        variable the input doesn't capture, or contains an extension set.

        :raise RuleValidationError: if any rules are invalid and raise_error
            is True
        :param bool raise_error:
        :rtype: list[Rule]
        """
        invalid = []
        for rule in self._rules:
            has_extension = any(s.kind == constants.EXTENSION for s in rule.output)
            if has_extension or rule.output.missing(rule.input.variables):
                invalid.append(rule)

        if invalid and raise_error:
            raise exceptions.RuleValidationError(
                'Some rules can never be rendered: {}'.format([str(r) for r in invalid])
            )
        return invalid


def compile_side(side, text):
    """
    :raise CompileError: if the text is not a valid template
    :param str  side: Which side of the rule the text is, input or output
    :param str  text:
    :rtype: Template
    """
    try:
        return Template.compile(text)
    except exceptions.CompileError as e:
        raise exceptions.CompileError(
            'Failed to compile {} template {!r}: {}'.format(side, text, e)
        ) from e
