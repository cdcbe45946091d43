import unittest
from fastapi.testclient import TestClient
from lunch.api.api_run import create_app
from lunch.infra.Lunch_Store import LunchStore


def first(pool):
    return pool[0]


class TestRestaurantsAPI(unittest.TestCase):

    def setUp(self):
        self.store = LunchStore.in_memory(chooser=first)
        self.client = TestClient(create_app(self.store))

    def tearDown(self):
        self.store.close()

    def _add(self, name, category):
        return self.client.post('/api/restaurants', json={'name': name, 'category': category})

    def test_add_and_list_sorted(self):
        for name in ('Zebra', 'Apple', 'Mango'):
            resp = self._add(name, 'cheap')
            self.assertEqual(resp.status_code, 200, resp.text)
            self.assertEqual(resp.json(), {'status': 'success'})
        resp = self.client.get('/api/restaurants')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([r['name'] for r in resp.json()], ['Apple', 'Mango', 'Zebra'])

    def test_add_strips_whitespace(self):
        self._add('  Teds  ', ' normal ')
        self.assertEqual(self.client.get('/api/restaurants').json(), [{'name': 'Teds', 'category': 'normal'}])

    def test_add_duplicate_message(self):
        self._add('Arbys', 'cheap')
        resp = self._add('Arbys', 'normal')
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()['error'], "Restaurant 'Arbys' already exists")

    def test_add_blank_fields_rejected(self):
        resp = self._add('   ', 'cheap')
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post('/api/restaurants', json={'name': 'Teds'})
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(self.store.list_all(), [])

    def test_list_filtered_by_category(self):
        self._add('Arbys', 'Cheap')
        self._add('Teds', 'normal')
        resp = self.client.get('/api/restaurants', params={'category': 'CHEAP'})
        self.assertEqual(resp.json(), [{'name': 'Arbys', 'category': 'Cheap'}])

    def test_update_restaurant(self):
        self._add('Teds', 'normal')
        resp = self.client.put('/api/restaurants/Teds', json={'name': "Ted's", 'category': 'cheap'})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(self.client.get('/api/restaurants').json(), [{'name': "Ted's", 'category': 'cheap'}])

    def test_update_errors(self):
        self._add('A', 'cheap')
        self._add('B', 'cheap')
        resp = self.client.put('/api/restaurants/Ghost', json={'name': 'Ghost', 'category': 'cheap'})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()['error'], "Restaurant 'Ghost' not found")
        resp = self.client.put('/api/restaurants/A', json={'name': 'B', 'category': 'cheap'})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()['error'], "Restaurant 'B' already exists")

    def test_delete_restaurant(self):
        self._add('Frosted Mug', 'normal')
        resp = self.client.delete('/api/restaurants/Frosted Mug')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.client.get('/api/restaurants').json(), [])
        # absent name is still a success
        resp = self.client.delete('/api/restaurants/Frosted Mug')
        self.assertEqual(resp.status_code, 200)

    def test_roll_and_history(self):
        self._add('A', 'cheap')
        self._add('B', 'cheap')
        first_roll = self.client.post('/api/roll', json={'category': 'Cheap'})
        self.assertEqual(first_roll.status_code, 200)
        self.assertEqual(first_roll.json(), {'name': 'A', 'category': 'cheap'})
        second_roll = self.client.post('/api/roll', json={'category': 'cheap'})
        self.assertEqual(second_roll.json()['name'], 'B')
        history = self.client.get('/api/history').json()
        self.assertEqual([h['name'] for h in history], ['B', 'A'])
        self.assertIn('picked_at', history[0])

    def test_roll_empty_category(self):
        resp = self.client.post('/api/roll', json={'category': 'normal'})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()['error'], 'No restaurants found!')

    def test_storage_error_is_500(self):
        self.store.close()
        resp = self.client.get('/api/restaurants')
        self.assertEqual(resp.status_code, 500)
        self.assertIn('error', resp.json())


if __name__ == '__main__':
    unittest.main()
