"""Resource record model and the class/type lexicons of zone files."""

import collections
import enum

NO_TTL = -1


class Error(Exception):
  pass


class UnknownClassError(Error):
  pass


class UnknownTypeError(Error):
  pass


@enum.unique
class RecordClass(enum.Enum):
  IN = 1
  CS = 2
  CH = 3
  HS = 4
  any = 255

  def __str__(self):
    return _CLASS_NAMES[self]


@enum.unique
class RecordType(enum.Enum):
  A = 1
  NS = 2
  MD = 3
  MF = 4
  CNAME = 5
  SOA = 6
  MB = 7
  MG = 8
  MR = 9
  NULL = 10
  WKS = 11
  PTR = 12
  HINFO = 13
  MINFO = 14
  MX = 15
  TXT = 16

  def __str__(self):
    return _TYPE_NAMES[self]


_CLASS_NAMES = {
  RecordClass.IN: 'IN',
  RecordClass.CS: 'CS',
  RecordClass.CH: 'CH',
  RecordClass.HS: 'HS',
  RecordClass.any: '*',
}

_TYPE_NAMES = {
  RecordType.A: 'A',
  RecordType.NS: 'NS',
  RecordType.MD: 'MD',
  RecordType.MF: 'MF',
  RecordType.CNAME: 'CNAME',
  RecordType.SOA: 'SOA',
  RecordType.MB: 'MB',
  RecordType.MG: 'MG',
  RecordType.MR: 'MR',
  RecordType.NULL: 'NULL',
  RecordType.WKS: 'WKS',
  RecordType.PTR: 'PTR',
  RecordType.HINFO: 'HINFO',
  RecordType.MINFO: 'MINFO',
  RecordType.MX: 'MX',
  RecordType.TXT: 'TXT',
}

_CLASSES_BY_NAME = {name: cls for cls, name in _CLASS_NAMES.items()}
_TYPES_BY_NAME = {name: rtype for rtype, name in _TYPE_NAMES.items()}


def parse_class(token):
  """Look up the RecordClass spelled exactly as token."""
  try:
    return _CLASSES_BY_NAME[token]
  except (KeyError, TypeError):
    raise UnknownClassError('unknown record class {!r}'.format(token)) from None

def parse_type(token):
  """Look up the RecordType spelled exactly as token."""
  try:
    return _TYPES_BY_NAME[token]
  except (KeyError, TypeError):
    raise UnknownTypeError('unknown record type {!r}'.format(token)) from None


class Record(collections.namedtuple('Record',
                                    ['domain_name', 'ttl', 'cls', 'type',
                                     'fields', 'comment'])):
  """A single resource record read from a zone file.

  Attributes:
    domain_name (str): absolute domain name, always ending with a dot.
    ttl (int): TTL in seconds, or NO_TTL when the source omitted it.
    cls (RecordClass): record class.
    type (RecordType): record type.
    fields (tuple): raw rdata tokens in source order. Grouping parentheses of
      SOA records and the quotes of TXT strings are kept as written.
    comment (str): trailing comment including its leading ';', or ''.
  """

  def __new__(_cls, domain_name, ttl, cls, type, fields=(), comment=''):
    return super().__new__(_cls, domain_name, ttl, cls, type,
                           tuple(fields), comment)

  def render(self):
    parts = [self.domain_name]
    if self.ttl != NO_TTL:
      parts.append(str(self.ttl))
    parts.append(str(self.cls))
    parts.append(str(self.type))
    parts.extend(self.fields)
    if self.comment:
      parts.append(self.comment)
    return ' '.join(parts)

  def __str__(self):
    return self.render()
