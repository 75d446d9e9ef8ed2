import json
import os
import tempfile
import unittest

from fairsched.config import Configuration, load_config


class TestLoadConfig(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, name, content):
        path = os.path.join(self.tmpdir.name, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def test_yaml(self):
        path = self._write('sched.yaml', "conf:\n  mapred.fairscheduler.capbasedloadmanager.overshootpercentage: 20\n")
        cfg = load_config(path)
        self.assertEqual(cfg['conf']['mapred.fairscheduler.capbasedloadmanager.overshootpercentage'], 20)

    def test_empty_yaml_is_empty_dict(self):
        self.assertEqual(load_config(self._write('empty.yml', "")), {})

    def test_json(self):
        path = self._write('sched.json', json.dumps({'a.b': '3'}))
        self.assertEqual(Configuration.from_file(path).get_int('a.b', 0), 3)


class TestConfiguration(unittest.TestCase):

    def test_mapping_behaviour(self):
        conf = Configuration({'a': 1})
        conf.set('b', 'x')
        self.assertEqual(len(conf), 2)
        self.assertEqual(sorted(conf), ['a', 'b'])
        self.assertEqual(conf['b'], 'x')
        self.assertIsNone(conf.get('missing'))

    def test_get_int(self):
        conf = Configuration({'i': 7, 's': ' 12 ', 'h': '0x1F', 'neg': '-4',
                              'bad': 'seven', 'f': 1.5, 'b': False, 'none': None})
        self.assertEqual(conf.get_int('i', 0), 7)
        self.assertEqual(conf.get_int('s', 0), 12)
        self.assertEqual(conf.get_int('h', 0), 31)
        self.assertEqual(conf.get_int('neg', 0), -4)
        self.assertEqual(conf.get_int('missing', 9), 9)
        for key in ('bad', 'f', 'b', 'none'):
            self.assertEqual(conf.get_int(key, 9), 9)

    def test_get_int_rejects_what_integer_options_do_not_allow(self):
        conf = Configuration({
            'underscore': '1_000', 'inner_sign': '-0x-5', 'double_sign': '--5',
            'unicode_digits': '١٢', 'too_big': '2147483648', 'too_small': -2 ** 31 - 1,
            'max': '2147483647', 'min': '-2147483648', 'plus': '+0x7fffffff',
        })
        for key in ('underscore', 'inner_sign', 'double_sign', 'unicode_digits', 'too_big', 'too_small'):
            self.assertEqual(conf.get_int(key, 9), 9, key)
        self.assertEqual(conf.get_int('max', 0), 2 ** 31 - 1)
        self.assertEqual(conf.get_int('min', 0), -2 ** 31)
        self.assertEqual(conf.get_int('plus', 0), 2 ** 31 - 1)

    def test_malformed_int_logs_warning(self):
        with self.assertLogs('fairsched.config', level='WARNING'):
            Configuration({'k': 'nope'}).get_int('k', 0)

    def test_get_bool(self):
        conf = Configuration({'t': True, 'ts': 'TRUE', 'fs': ' false', 'bad': 'yes'})
        self.assertTrue(conf.get_bool('t', False))
        self.assertTrue(conf.get_bool('ts', False))
        self.assertFalse(conf.get_bool('fs', True))
        self.assertTrue(conf.get_bool('bad', True))
        self.assertFalse(conf.get_bool('missing', False))


if __name__ == '__main__':
    unittest.main()
