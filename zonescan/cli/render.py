"""Command line tool for rendering zone files in canonical form.

Every record of the source zone file is written on its own line, with
relative names resolved against the origin and parenthesized groups joined.
"""

import argparse
import logging
import sys
from zonescan import record, scanner

logger = logging.getLogger(__name__)


def parse_args(argv=None):
  parser = argparse.ArgumentParser(description='Zone file canonicalizer.')
  parser.add_argument('source', metavar='src', type=str,
                      help='Zone file to be scanned.')
  parser.add_argument('dest', metavar='dest', type=str, nargs='?',
                      help='Destination file for the records. '
                           'Default is standard output.')
  parser.add_argument('--origin', type=str, default=None,
                      help='Initial origin for relative domain names.')
  parser.add_argument('--log-level', default='WARNING',
                      choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                      help='Log level. Default is WARNING.')
  return parser.parse_args(argv)

def render_records(records, destf):
  count = 0
  for r in records:
    destf.write(r.render() + '\n')
    count += 1
  return count

def main(argv=None):
  args = parse_args(argv)
  logging.basicConfig(
      level=getattr(logging, args.log_level),
      format='%(asctime)s %(levelname)s %(name)s: %(message)s')

  with open(args.source, mode='rt') as srcf:
    try:
      records = scanner.Scanner(srcf, origin=args.origin)
      if args.dest is None:
        count = render_records(records, sys.stdout)
      else:
        with open(args.dest, mode='wt') as destf:
          count = render_records(records, destf)
    except record.Error as e:
      logger.error('%s: %s', args.source, e)
      return 1
  logger.info('%d records rendered from %s', count, args.source)
  return 0

if __name__ == '__main__':
  sys.exit(main())
