from linkmap import constants
from linkmap import exceptions
from linkmap import segment


class Template(object):
    """
    Ordered, immutable sequence of segments compiled from one side of a rule.

    Matching is always against the whole string. A variable's extent is
    decided by looking ahead at the next segment only, and the first textual
    occurrence of that segment is used as the boundary with no backtracking.
    """

    @classmethod
    def compile(cls, text):
        """
        :raise CompileError: if the text is not a valid template
        :param str  text:
        :rtype: Template
        """
        return cls(tokenize(text), text)

    def __init__(self, segments, text=None):
        """
        :param Iterable[segment.Segment]   segments:
        :param str                          text: Source string, rebuilt from
                                                  the segments if not given
        """
        self._segments = tuple(segments)
        for previous, current in zip(self._segments, self._segments[1:]):
            if previous.kind == current.kind == constants.VARIABLE:
                raise exceptions.CompileError(
                    'consecutive variables: {}{}'.format(previous, current)
                )
        self._text = ''.join(s.text for s in self._segments) if text is None else text

    def __repr__(self):
        return 'Template({!r})'.format(self._text)

    def __str__(self):
        return self._text

    def __eq__(self, other):
        if isinstance(other, Template):
            return self._segments == other.segments
        if isinstance(other, (list, tuple)):
            return self._segments == tuple(other)
        return NotImplemented

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        return hash(self._segments)

    def __len__(self):
        return len(self._segments)

    def __iter__(self):
        return iter(self._segments)

    def __getitem__(self, index):
        return self._segments[index]

    @property
    def segments(self):
        """
        :rtype: tuple[segment.Segment]
        """
        return self._segments

    @property
    def text(self):
        """
        :rtype: str
        """
        return self._text

    @property
    def variables(self):
        """
        Names of the variables in the order they appear in the template

        :rtype: tuple[str]
        """
        return tuple(s.name for s in self._segments if s.kind == constants.VARIABLE)

    def match(self, string):
        """
        Matches the whole string against the template.

        :param str  string:
        :return: Dictionary of variable names to their captured values, or None
                 if the string is not an instance of the template.
        :rtype: dict[str, str]|None
        """
        bindings = {}
        if not self._segments:
            return bindings if string == '' else None

        offset = 0
        last = len(self._segments) - 1
        for index, seg in enumerate(self._segments):
            remainder = string[offset:]
            if seg.kind != constants.VARIABLE:
                size = seg.consume(remainder)
                if size is None:
                    return None
                offset += size
                continue

            value = remainder
            if index < last:
                boundary = self._segments[index + 1].find(remainder)
                if boundary == -1:
                    return None
                value = remainder[:boundary]
            # Later bindings of the same name overwrite earlier ones
            bindings[seg.name] = value
            offset += len(value)

        return bindings if offset == len(string) else None

    def missing(self, bindings):
        """
        :param bindings: Any iterable of variable names
        :return: Variable names used by the template that are not bound
        :rtype: list[str]
        """
        return [name for name in self.variables if name not in bindings]

    def parse(self, string):
        """
        Same as match, but raises an error if the string does not match.

        :raise ParseError: if the string doesn't match the template
        :param str  string:
        :rtype: dict[str, str]
        """
        bindings = self.match(string)
        if bindings is None:
            raise exceptions.ParseError(
                'String {!r} does not match Template: {}'.format(string, self)
            )
        return bindings

    def render(self, bindings):
        """
        Substitutes the bound values into the template.

        :raise RenderError: if a variable is unbound or the template contains
            an extension set
        :param dict[str, str]   bindings:
        :rtype: str
        """
        return ''.join(seg.render(bindings) for seg in self._segments)


def compile(text):
    """
    Compiles a template string, eg, 'posts/$1.{md,mdx}'

    :raise CompileError: if the text is not a valid template
    :param str  text:
    :rtype: Template
    """
    return Template.compile(text)


def tokenize(text):
    """
    Splits a template string into its segments with a single left to right
    scan. The kind of the segment being accumulated switches on '$' and '{',
    and '}' or the first non-digit after a variable returns to literal text.

    :raise CompileError: if two variables are adjacent, a variable has no
        digits, or braces are unbalanced
    :param str  text:
    :rtype: list[segment.Segment]
    """
    segments = []
    kind = constants.LITERAL
    buf = ''
    for char in text:
        if char == constants.VARIABLE_START:
            if buf:
                if kind == constants.VARIABLE:
                    raise exceptions.CompileError(
                        'consecutive variables in template: {!r}'.format(text)
                    )
                segments.append(segment.get_segment(kind, buf))
            kind = constants.VARIABLE
            buf = char
        elif char == constants.EXTENSION_START:
            if buf:
                segments.append(segment.get_segment(kind, buf))
            kind = constants.EXTENSION
            buf = char
        elif char == constants.EXTENSION_END:
            segments.append(segment.get_segment(constants.EXTENSION, buf + char))
            kind = constants.LITERAL
            buf = ''
        else:
            if kind == constants.VARIABLE and char not in constants.DIGITS:
                # Raises if the buffer is only the '$'
                segments.append(segment.get_segment(kind, buf))
                kind = constants.LITERAL
                buf = ''
            buf += char

    if buf:
        segments.append(segment.get_segment(kind, buf))
    return segments
