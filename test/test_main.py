import argparse
import os
import tempfile
import unittest
from unittest.mock import patch
from graphqlize.graphqlize import main

def get_json():
    """Provides the JSON schema input file path."""
    return os.path.join(os.path.dirname(__file__), 'jsons', 'person.json')

def get_documents():
    """Provides the multi-document JSON schema input file path."""
    return os.path.join(os.path.dirname(__file__), 'jsons', 'documents.json')

class TestMain(unittest.TestCase):

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command=None))
    def test_main_no_command(self, mock_parse_args):
        """Test main function with no command."""
        with patch('argparse.ArgumentParser.print_help') as mock_help:
            main()
        mock_help.assert_called_once()

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command=None, version=True))
    def test_main_version(self, mock_parse_args):
        """Test main function with --version."""
        with patch('builtins.print') as mock_print:
            main()
        self.assertTrue(mock_print.call_args[0][0].startswith('graphqlize '))

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command='j2g', input=get_json(), out=tempfile.gettempdir() + '/person.graphql', log_level='WARNING'))
    def test_main_j2g_command(self, mock_parse_args):
        """Test main function with j2g command."""
        main()
        assert os.path.exists(tempfile.gettempdir() + '/person.graphql')
        with open(tempfile.gettempdir() + '/person.graphql', 'r', encoding='utf-8') as f:
            self.assertIn('input PersonIn', f.read())

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command='j2genum', input=get_documents(), out=tempfile.gettempdir() + '/documents_enums.py', log_level='WARNING'))
    def test_main_j2genum_command(self, mock_parse_args):
        """Test main function with j2genum command."""
        main()
        with open(tempfile.gettempdir() + '/documents_enums.py', 'r', encoding='utf-8') as f:
            self.assertIn('def convert_keeper_level_from_graphql(value):', f.read())

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command='j2g', input=get_json(), out=None, log_level='WARNING'))
    def test_main_j2g_to_stdout(self, mock_parse_args):
        """Test main function writing the SDL to stdout."""
        with patch('sys.stdout.write') as mock_write:
            main()
        self.assertIn('type Person', mock_write.call_args[0][0])

    def test_main_conversion_error(self):
        """Test main function exits with an error for a schema without id."""
        with tempfile.NamedTemporaryFile('w', suffix='.json', delete=False, encoding='utf-8') as f:
            f.write('{"type": "object"}')
        args = argparse.Namespace(command='j2g', input=f.name, out=f.name + '.graphql', log_level='WARNING')
        try:
            with patch('argparse.ArgumentParser.parse_args', return_value=args), patch('builtins.print') as mock_print:
                with self.assertRaises(SystemExit) as ctx:
                    main()
            self.assertEqual(ctx.exception.code, 1)
            self.assertEqual(mock_print.call_args[0][0], 'Error: ')
        finally:
            os.remove(f.name)

if __name__ == '__main__':
    unittest.main()
