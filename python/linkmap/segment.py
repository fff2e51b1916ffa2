from linkmap import constants
from linkmap import exceptions


class Segment(object):
    kind = None  # type: str
    pattern = None

    def __init__(self, text):
        """
        :raise CompileError: if the text is not valid for this segment kind

        :param str  text:
        """
        if not self.pattern.match(text):
            raise exceptions.CompileError(self._invalid_message(text))
        self._text = text

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self._text)

    def __str__(self):
        return self._text

    def __eq__(self, other):
        if not isinstance(other, Segment):
            return NotImplemented
        return self.kind == other.kind and self._text == other.text

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        return hash((self.kind, self._text))

    @property
    def text(self):
        """
        :rtype: str
        """
        return self._text

    def consume(self, string):
        """
        Number of characters this segment consumes from the start of the
        string, or None if the string does not match the segment.

        :param str  string:
        :rtype: int|None
        """
        raise NotImplementedError

    def find(self, string):
        """
        Index of the first place in the string where this segment could begin,
        used to bound a preceding variable. Returns -1 if there is none.

        :param str  string:
        :rtype: int
        """
        raise NotImplementedError

    def render(self, bindings):
        """
        :raise RenderError: if the segment cannot be rendered
        :param dict[str, str]   bindings:
        :rtype: str
        """
        raise NotImplementedError

    def _invalid_message(self, text):
        return 'Invalid {} segment: {!r}'.format(self.kind, text)


class LiteralSegment(Segment):
    kind = constants.LITERAL
    pattern = constants.PATTERN_LITERAL

    def consume(self, string):
        return len(self._text) if string.startswith(self._text) else None

    def find(self, string):
        return string.find(self._text)

    def render(self, bindings):
        return self._text


class VariableSegment(Segment):
    kind = constants.VARIABLE
    pattern = constants.PATTERN_VARIABLE

    @property
    def name(self):
        """
        Name the variable is bound under, eg, '$1'

        :rtype: str
        """
        return self._text

    def render(self, bindings):
        try:
            return bindings[self._text]
        except KeyError:
            raise exceptions.RenderError('missing variable {}'.format(self._text))

    def _invalid_message(self, text):
        return 'variable without digits: {!r}'.format(text)


class ExtensionSegment(Segment):
    """
    Brace delimited, comma separated alternatives, eg, {md,mdx}. Only valid on
    the matching side of a rule, and matched against the end of the string.
    """
    kind = constants.EXTENSION
    pattern = constants.PATTERN_EXTENSION

    def __init__(self, text):
        super(ExtensionSegment, self).__init__(text)
        self._alternatives = tuple(text[1:-1].split(constants.EXTENSION_SEPARATOR))

    @property
    def alternatives(self):
        """
        :rtype: tuple[str]
        """
        return self._alternatives

    def consume(self, string):
        # Suffix test against the whole remainder, first listed alternative wins
        for alternative in self._alternatives:
            if string.endswith(alternative):
                return len(alternative)
        return None

    def find(self, string):
        # First listed alternative that occurs at all, not the earliest overall
        for alternative in self._alternatives:
            index = string.find(alternative)
            if index != -1:
                return index
        return -1

    def render(self, bindings):
        raise exceptions.RenderError('extensions not supported in output position')


SEGMENT_TYPES = {
    constants.LITERAL: LiteralSegment,
    constants.VARIABLE: VariableSegment,
    constants.EXTENSION: ExtensionSegment,
}


def get_segment(kind, text):
    """
    Creates a Segment object of the given kind

    :raise CompileError: if the text is invalid for the kind
    :raise KeyError: if the kind is unknown

    :param str  kind:
    :param str  text:
    :rtype: Segment
    """
    try:
        cls = SEGMENT_TYPES[kind]
    except KeyError:
        raise KeyError('Unknown segment kind: {}'.format(kind))
    return cls(text)
