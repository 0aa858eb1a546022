import unittest
from ordmap import error
from ordmap.tests.base import OrderedMapTestCase, Record


class Pilot:
    rank = 'captain'

    def __init__(self, name):
        self.name = name


class Slotted:
    __slots__ = ('name', 'age')

    def __init__(self, name):
        self.name = name


class SearchTestBase(OrderedMapTestCase):
    def setUp(self):
        super().setUp()
        self.alice = Record(name='Alice', role='admin', age=30)
        self.bob = Record(name='Bob', role='user', age=1.0)
        self.carol = Record(name='Carol', role='admin', age=1)
        self.dave = Record(name='Dave', role=None, age=True)
        self.users = self.make_map([(1, self.alice), (2, self.bob),
                                    (3, self.carol), (4, self.dave)])


class FindAllTests(SearchTestBase):
    def test_matches_in_order(self):
        self.assertEqual([self.alice, self.carol],
                         self.users.find_all('role', 'admin'))

    def test_no_match(self):
        self.assertEqual([], self.users.find_all('role', 'owner'))

    def test_none_is_a_value(self):
        self.assertEqual([self.dave], self.users.find_all('role', None))

    def test_no_coercion(self):
        self.assertEqual([self.carol], self.users.find_all('age', 1))
        self.assertEqual([self.bob], self.users.find_all('age', 1.0))
        self.assertEqual([self.dave], self.users.find_all('age', True))

    def test_mapping_values(self):
        m = self.make_map([('x', {'kind': 'a'}), ('y', {'kind': 'b'}),
                           ('z', {'other': 'a'})])
        self.assertEqual([{'kind': 'a'}], m.find_all('kind', 'a'))

    def test_requires_string_property(self):
        with self.assertRaisesRegex(error.InvalidArgumentType, 'string'):
            self.users.find_all(1, 'admin')

    def test_requires_value(self):
        with self.assertRaises(error.MissingRequiredValue):
            self.users.find_all('role')


class FindTests(SearchTestBase):
    def test_property(self):
        self.assertIs(self.alice, self.users.find('role', 'admin'))
        self.assertIs(self.bob, self.users.find('name', 'Bob'))

    def test_property_miss(self):
        self.assertIsNone(self.users.find('name', 'Eve'))
        self.assertIsNone(self.users.find('missing', 'Eve'))

    def test_property_requires_value(self):
        with self.assertRaisesRegex(error.MissingRequiredValue,
                                    'Value must be specified'):
            self.users.find('name')

    def test_predicate(self):
        found = self.users.find(lambda user, key, m: key > 1 and
                                user.role == 'admin')
        self.assertIs(self.carol, found)

    def test_predicate_arguments(self):
        calls = []

        def predicate(value, key, collection):
            calls.append((value, key, collection))
            return False

        self.assertIsNone(self.users.find(predicate))
        self.assertEqual(4, len(calls))
        self.assertEqual((self.alice, 1, self.users), calls[0])
        self.assertIs(self.users, calls[0][2])

    def test_bad_specifier(self):
        for search in (123, None, ['name']):
            with self.assertRaisesRegex(error.InvalidArgumentType,
                                        'property string or a function'):
                self.users.find(search, 'x')

    def test_empty_map(self):
        self.assertIsNone(self.make_map().find('name', 'Bob'))
        self.assertIsNone(self.make_map().find(lambda *args: True))


class FindKeyTests(SearchTestBase):
    def test_property(self):
        self.assertEqual(2, self.users.find_key('name', 'Bob'))
        self.assertEqual(1, self.users.find_key('role', 'admin'))
        self.assertIsNone(self.users.find_key('name', 'Eve'))

    def test_predicate(self):
        self.assertEqual(3, self.users.find_key(
            lambda user, key, m: user.name.startswith('C')))
        self.assertIsNone(self.users.find_key(lambda *args: False))

    def test_requires_value(self):
        with self.assertRaises(error.MissingRequiredValue):
            self.users.find_key('name')

    def test_bad_specifier(self):
        with self.assertRaises(error.InvalidArgumentType):
            self.users.find_key(42, 'x')

    def test_class_attribute_only_matches_find(self):
        pilot = Pilot('Amelia')
        m = self.make_map([('p', pilot)])
        self.assertIs(pilot, m.find('rank', 'captain'))
        self.assertIsNone(m.find_key('rank', 'captain'))

        pilot.rank = 'captain'
        self.assertEqual('p', m.find_key('rank', 'captain'))

    def test_mapping_values_need_the_key(self):
        m = self.make_map([('x', {'other': 1}), ('y', {'kind': None})])
        self.assertEqual('y', m.find_key('kind', None))

    def test_slots(self):
        m = self.make_map([('s', Slotted('Sam'))])
        self.assertEqual('s', m.find_key('name', 'Sam'))
        self.assertIsNone(m.find_key('age', None))


class ExistsTests(SearchTestBase):
    def test_exists(self):
        self.assertTrue(self.users.exists('name', 'Carol'))
        self.assertFalse(self.users.exists('name', 'Eve'))

    def test_falsy_match(self):
        m = self.make_map([('a', Record(count=0))])
        self.assertTrue(m.exists('count', 0))

    def test_no_predicate_mode(self):
        with self.assertRaises(error.InvalidArgumentType):
            self.users.exists(lambda *args: True)

    def test_requires_value(self):
        with self.assertRaises(error.MissingRequiredValue):
            self.users.exists('name')


if __name__ == '__main__':
    unittest.main()
