import os
import sys
import unittest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from graphqlize.common import pascal, snake, type_name


class TestCommon(unittest.TestCase):

    def test_type_name(self):
        self.assertEqual(type_name('person'), 'Person')
        self.assertEqual(type_name('person.homeAddress'), 'PersonHomeAddress')
        self.assertEqual(type_name('person.homeAddressIn'), 'PersonHomeAddressIn')
        self.assertEqual(type_name('Definition.first_name'), 'DefinitionFirstName')
        self.assertEqual(type_name('animal.switch[1]'), 'AnimalSwitch1')
        self.assertEqual(type_name('https://example.com/person.json'), 'HttpsExampleComPersonJson')

    def test_pascal(self):
        self.assertEqual(pascal('favoriteColor'), 'FavoriteColor')
        self.assertEqual(pascal('first_name'), 'FirstName')
        self.assertEqual(pascal('a.b_c'), 'A.BC')

    def test_snake(self):
        self.assertEqual(snake('favoriteColor'), 'favorite_color')
        self.assertEqual(snake('DefinitionPet'), 'definition_pet')
        self.assertEqual(snake('first_name'), 'first_name')


if __name__ == '__main__':
    unittest.main()
