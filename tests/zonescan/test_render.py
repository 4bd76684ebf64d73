import io
import os
import tempfile
import unittest
from unittest import mock
from zonescan.cli import render


class TestRender(unittest.TestCase):
  ZONE = ('$ORIGIN adomain.com.\n'
          '@ 300 IN SOA ns hostmaster (\n'
          '      1271271271 ; serial\n'
          '      10800 3600 604800 300 )\n'
          'www IN A 192.168.0.1;aComment\n')
  EXPECTED = ('adomain.com. 300 IN SOA ns hostmaster '
              '( 1271271271 10800 3600 604800 300 ) ; serial\n'
              'www.adomain.com. IN A 192.168.0.1 ;aComment\n')

  def setUp(self):
    self._tmpdir = tempfile.TemporaryDirectory()
    self.addCleanup(self._tmpdir.cleanup)

  def _write_zone(self, text):
    path = os.path.join(self._tmpdir.name, 'adomain.zone')
    with open(path, mode='wt') as f:
      f.write(text)
    return path

  def test_parse_args(self):
    args = render.parse_args(['in.zone'])
    self.assertEqual('in.zone', args.source)
    self.assertIsNone(args.dest)
    self.assertIsNone(args.origin)
    self.assertEqual('WARNING', args.log_level)

  def test_render_to_file(self):
    src = self._write_zone(self.ZONE)
    dest = os.path.join(self._tmpdir.name, 'out.zone')
    self.assertEqual(0, render.main([src, dest]))
    with open(dest, mode='rt') as f:
      self.assertEqual(self.EXPECTED, f.read())

  def test_render_to_stdout(self):
    src = self._write_zone('www IN A 192.168.0.1\n')
    with mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
      self.assertEqual(0, render.main([src, '--origin', 'adomain.com.']))
    self.assertEqual('www.adomain.com. IN A 192.168.0.1\n', stdout.getvalue())

  def test_scan_error(self):
    src = self._write_zone('www IN A 192.168.0.1\n')
    with self.assertLogs('zonescan.cli.render', level='ERROR') as cm:
      self.assertEqual(1, render.main([src]))
    self.assertIn('no origin defined', cm.output[0])

  def test_relative_origin_option(self):
    src = self._write_zone('www IN A 192.168.0.1\n')
    with self.assertLogs('zonescan.cli.render', level='ERROR'):
      self.assertEqual(1, render.main([src, '--origin', 'adomain.com']))

  def test_render_records_counts(self):
    out = io.StringIO()
    self.assertEqual(0, render.render_records([], out))
    self.assertEqual('', out.getvalue())

if __name__ == '__main__':
  unittest.main()
