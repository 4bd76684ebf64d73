"""Scanner turning zone file text into Record objects.

The scanner reads its source one physical line at a time and keeps a cursor
into the current line. Records are tokenized according to their type: SOA
rdata may be grouped in parentheses spanning several lines, TXT rdata is a
double-quoted string, and every other type is a run of whitespace separated
tokens terminated by the end of the line or a comment.
"""

import enum
import logging
import regex
from zonescan import record

logger = logging.getLogger(__name__)

ORIGIN_DIRECTIVE = '$ORIGIN'

_LINE_ENDS = frozenset(('', '\n', ';'))

# Blanks are exactly the whitespace that ends a token, except for newlines
# outside of a parenthesized group.
_BLANK_RE = regex.compile(r'[^\S\n]+')
_GROUPED_BLANK_RE = regex.compile(r'\s+')

# Ordinary tokens end at whitespace or at the start of a comment.
_WORD_RE = regex.compile(r'[^\s;]+')
# The type keyword may be immediately followed by the opening quote of TXT
# or the opening parenthesis of SOA.
_TYPE_RE = regex.compile(r'[^\s;"(]+')
# Parentheses are tokens of their own inside SOA rdata.
_GROUPED_RE = regex.compile(r'[^\s;()]+')
_TTL_RE = regex.compile(r'[+-]?[0-9]+')


class Error(record.Error):
  """Base class of scan errors.

  Attributes:
    lineno (int): physical line on which the error was detected, or None when
      the error is not tied to the input stream.
  """
  def __init__(self, message, lineno=None):
    if lineno is not None:
      message = 'line {}: {}'.format(lineno, message)
    super().__init__(message)
    self.lineno = lineno


class UnexpectedEndError(Error):
  pass


class UnterminatedStringError(Error):
  pass


class UnquotedStringError(Error):
  pass


class UnterminatedGroupError(Error):
  pass


class UnbalancedGroupError(Error):
  pass


class NoOriginError(Error):
  pass


class RelativeOriginError(Error):
  pass


class MissingOriginArgumentError(Error):
  pass


class MalformedDirectiveError(Error):
  pass


class UnknownDirectiveError(Error):
  pass


@enum.unique
class _Mode(enum.Enum):
  normal = 0
  quoted = 1
  grouped = 2


def is_absolute(name):
  return name.endswith('.')


class Scanner:
  """Reads resource records from a zone file one at a time.

  The scanner borrows src and never closes it. It is not safe to share a
  scanner between threads.
  """
  def __init__(self, src, origin=None):
    """Initialize Scanner over a text stream.

    Args:
      src: text stream providing readline(), e.g. a file opened in text mode
        or io.StringIO.
      origin (str, optional): initial origin; must be an absolute name.
    """
    self._src = src
    self._line = ''
    self._pos = 0
    self._lineno = 0
    self._mode = _Mode.normal
    self._origin = None
    if origin is not None:
      self.set_origin(origin)

  @property
  def origin(self):
    return self._origin

  @property
  def lineno(self):
    return self._lineno

  def set_origin(self, name):
    self._change_origin(name)

  def __iter__(self):
    return self

  def __next__(self):
    r = self.next_record()
    if r is None:
      raise StopIteration
    return r

  def next_record(self):
    """Scan the next record.

    Blank lines, comment-only lines and control entries are consumed
    silently.

    Returns:
      The next Record, or None if the input is exhausted.

    Raises:
      record.Error: the input is malformed at the current position.
    """
    while True:
      self._mode = _Mode.normal
      self._skip_blanks()
      c = self._peek()
      if not c:
        return None
      elif c == '\n':
        self._advance()
      elif c == ';':
        self._read_comment()
      elif c == '$':
        self._read_directive()
      else:
        return self._read_record()

  # Character level access. The current line is refilled from the source
  # whenever the cursor runs past its end; '' stands for the end of input.

  def _peek(self):
    if self._pos >= len(self._line):
      line = self._src.readline()
      if not line:
        return ''
      if line.endswith('\r\n'):
        line = line[:-2] + '\n'
      self._line = line
      self._pos = 0
      self._lineno += 1
    return self._line[self._pos]

  def _advance(self):
    self._pos += 1

  def _getc(self):
    c = self._peek()
    if c:
      self._advance()
    return c

  def _skip_blanks(self):
    if self._mode is _Mode.grouped:
      pattern = _GROUPED_BLANK_RE
    else:
      pattern = _BLANK_RE
    while self._peek():
      m = pattern.match(self._line, self._pos)
      if not m:
        return
      self._pos = m.end()

  def _read_word(self, pattern=_WORD_RE):
    """Read the next token matching pattern on the current line.

    Returns '' without consuming anything if no token starts at the cursor,
    in particular at the end of the line, at a comment or at the end of input.
    """
    self._skip_blanks()
    if not self._peek():
      return ''
    m = pattern.match(self._line, self._pos)
    if not m:
      return ''
    self._pos = m.end()
    return m.group()

  def _read_comment(self):
    assert self._peek() == ';'
    end = self._line.find('\n', self._pos)
    if end < 0:
      end = len(self._line)
    comment = self._line[self._pos:end]
    self._pos = end
    return comment

  def _finish_line(self):
    """Consume an optional comment and the end of the current line."""
    self._skip_blanks()
    comment = ''
    if self._peek() == ';':
      comment = self._read_comment()
    if self._peek() == '\n':
      self._advance()
    return comment

  # Control entries.

  def _read_directive(self):
    keyword = self._read_word()
    if keyword != ORIGIN_DIRECTIVE:
      raise UnknownDirectiveError(
          'unknown control entry {!r}'.format(keyword), self._lineno)
    name = self._read_word()
    if not name:
      raise MissingOriginArgumentError(
          '{} requires a domain name'.format(ORIGIN_DIRECTIVE), self._lineno)
    if self._read_word():
      raise MalformedDirectiveError(
          '{} takes exactly one domain name'.format(ORIGIN_DIRECTIVE),
          self._lineno)
    lineno = self._lineno
    self._finish_line()
    self._change_origin(name, lineno)

  def _change_origin(self, name, lineno=None):
    if not is_absolute(name):
      raise RelativeOriginError(
          'origin {!r} is not an absolute domain name'.format(name), lineno)
    logger.debug('origin set to %s', name)
    self._origin = name

  def _resolve(self, name):
    if name != '@' and is_absolute(name):
      return name
    if self._origin is None:
      raise NoOriginError(
          'no origin defined for domain name {!r}'.format(name), self._lineno)
    if name == '@':
      return self._origin
    if self._origin == '.':
      return name + '.'
    return name + '.' + self._origin

  # Records.

  def _read_record(self):
    domain_name = self._resolve(self._read_word())

    token = self._read_word()
    ttl = record.NO_TTL
    if _TTL_RE.fullmatch(token):
      ttl = int(token)
      token = self._read_word()
    rcls = record.parse_class(self._require(token, 'class'))
    rtype = record.parse_type(self._require(self._read_word(_TYPE_RE), 'type'))

    if rtype is record.RecordType.SOA:
      fields, comment = self._read_grouped_fields()
    elif rtype is record.RecordType.TXT:
      fields, comment = self._read_strings()
    else:
      fields, comment = self._read_fields()
    return record.Record(domain_name, ttl, rcls, rtype, fields, comment)

  def _require(self, token, what):
    if not token:
      raise UnexpectedEndError('missing record {}'.format(what), self._lineno)
    return token

  def _read_fields(self):
    fields = []
    token = self._read_word()
    while token:
      fields.append(token)
      token = self._read_word()
    if not fields:
      raise UnexpectedEndError('missing record data', self._lineno)
    return fields, self._finish_line()

  def _read_grouped_fields(self):
    fields = []
    comments = []
    depth = 0
    while True:
      self._skip_blanks()
      c = self._peek()
      if not c:
        if self._mode is _Mode.grouped:
          raise UnterminatedGroupError(
              'unbalanced parentheses at end of input', self._lineno)
        break
      elif c == '\n':
        self._advance()
        break
      elif c == ';':
        comments.append(self._read_comment())
      elif c == '(':
        self._advance()
        fields.append(c)
        depth += 1
        self._mode = _Mode.grouped
      elif c == ')':
        if not depth:
          raise UnbalancedGroupError("')' without matching '('", self._lineno)
        self._advance()
        fields.append(c)
        depth -= 1
        if not depth:
          self._mode = _Mode.normal
      else:
        token = self._read_word(_GROUPED_RE)
        if not token:
          raise Error('unexpected character {!r}'.format(c), self._lineno)
        fields.append(token)

    if all(f in ('(', ')') for f in fields):
      raise UnexpectedEndError('missing record data', self._lineno)
    return fields, ' '.join(comments)

  def _read_strings(self):
    fields = []
    self._skip_blanks()
    while self._peek() == '"':
      fields.append(self._read_quoted())
      self._skip_blanks()

    if self._peek() not in _LINE_ENDS:
      raise UnquotedStringError('expected a quoted string', self._lineno)
    if not fields:
      raise UnexpectedEndError('missing record data', self._lineno)
    return fields, self._finish_line()

  def _read_quoted(self):
    """Read a quoted string verbatim, including quotes and escapes."""
    self._mode = _Mode.quoted
    chars = [self._getc()]
    escaped = False
    while True:
      c = self._getc()
      if not c:
        raise UnterminatedStringError(
            'unterminated quoted string at end of input', self._lineno)
      chars.append(c)
      if escaped:
        escaped = False
      elif c == '\\':
        escaped = True
      elif c == '"':
        break
    self._mode = _Mode.normal
    return ''.join(chars)


def from_stream(src, origin=None, filt=None):
  """Read records from a zone file stream."""
  filt = filt or (lambda x: True)
  for r in Scanner(src, origin=origin):
    if filt(r):
      yield r
