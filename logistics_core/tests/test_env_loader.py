import os
import tempfile
import unittest

from logistics_core.utils.env_loader import env_bool, env_list, load_env_from_file


class TestEnvLoader(unittest.TestCase):

    def setUp(self):
        self.original_environ = os.environ.copy()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.env_file = os.path.join(self.temp_dir.name, 'env_var.env')

    def tearDown(self):
        os.environ.clear()
        os.environ.update(self.original_environ)
        self.temp_dir.cleanup()

    def write(self, content):
        with open(self.env_file, 'w') as f:
            f.write(content)

    def test_loads_pairs_and_skips_comments(self):
        self.write(
            "YARD_KEY1=value1\n"
            "# a comment\n"
            "  YARD_KEY2 =  spaced value  \n"
            "\n"
            "export YARD_KEY3=exported\n"
            "YARD_KEY4=\"quoted value\"\n"
            "not a pair\n"
        )

        with self.assertLogs('logistics_core.utils.env_loader', level='INFO') as cm:
            result = load_env_from_file(self.env_file)

        self.assertTrue(result)
        self.assertEqual(os.environ['YARD_KEY1'], 'value1')
        self.assertEqual(os.environ['YARD_KEY2'], 'spaced value')
        self.assertEqual(os.environ['YARD_KEY3'], 'exported')
        self.assertEqual(os.environ['YARD_KEY4'], 'quoted value')
        self.assertIn('Loaded 4 environment variables', cm.output[0])

    def test_existing_variables_are_not_overridden(self):
        os.environ['YARD_EXISTING'] = 'from-process'
        self.write("YARD_EXISTING=from-file\n")

        load_env_from_file(self.env_file)
        self.assertEqual(os.environ['YARD_EXISTING'], 'from-process')

        load_env_from_file(self.env_file, override=True)
        self.assertEqual(os.environ['YARD_EXISTING'], 'from-file')

    def test_missing_file_returns_false(self):
        self.assertFalse(load_env_from_file(os.path.join(self.temp_dir.name, 'missing.env')))

    def test_env_bool_and_list(self):
        os.environ['YARD_FLAG'] = 'True'
        os.environ['YARD_HOSTS'] = 'a.example, b.example,,'

        self.assertTrue(env_bool('YARD_FLAG'))
        self.assertFalse(env_bool('YARD_UNSET_FLAG'))
        self.assertTrue(env_bool('YARD_UNSET_FLAG', default=True))
        self.assertEqual(env_list('YARD_HOSTS'), ['a.example', 'b.example'])
        self.assertEqual(env_list('YARD_UNSET_HOSTS', default=['localhost']), ['localhost'])


if __name__ == '__main__':
    unittest.main()
