import json
import shutil
import tempfile
import unittest
from datetime import date
from pathlib import Path

from fastapi.testclient import TestClient

from consumables.api import api_run
from consumables.api.api_run import create_app
from consumables.domain.Catalogue import Catalogue

TODAY = date(2024, 6, 1)

MILK = {"name": "Milk", "type": "drink", "notes": "", "price": 3.50, "measure": 1.0, "expiryDate": "2024-06-05"}
CHEESE = {"name": "Cheese", "type": "FOOD", "notes": "cheddar", "price": 6.25, "measure": 0.5, "expiryDate": "2024-05-20"}


class TestConsumablesAPI(unittest.TestCase):

    def setUp(self):
        self.data_dir = Path(tempfile.mkdtemp())
        self.db_path = self.data_dir / "ConsumablesDatabase.json"
        self.client = self._start()

    def tearDown(self):
        shutil.rmtree(self.data_dir, ignore_errors=True)

    def _start(self) -> TestClient:
        catalogue = Catalogue(today=lambda: TODAY)
        catalogue.load_from(self.db_path)
        return TestClient(create_app(catalogue=catalogue, database_path=self.db_path))

    def _add(self, payload: dict):
        return self.client.post('/addItem', content=json.dumps(payload),
                                headers={"Content-Type": "application/json"})

    def test_ping(self):
        resp = self.client.get('/ping')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.text, 'System is up!')

    def test_list_all_empty(self):
        resp = self.client.get('/listAll')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])

    def test_add_item_normalizes_type(self):
        resp = self._add(MILK)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json(), [{
            "id": 1, "name": "Milk", "type": "DRINK", "notes": "",
            "price": 3.5, "measure": 1.0, "expiryDate": "2024-06-05",
        }])

    def test_full_scenario(self):
        self._add(MILK)
        resp = self._add(CHEESE)
        self.assertEqual(resp.status_code, 201)

        listed = self.client.get('/listAll').json()
        self.assertEqual([(i["name"], i["id"], i["type"]) for i in listed],
                         [("Cheese", 2, "FOOD"), ("Milk", 1, "DRINK")])

        expired = self.client.get('/listExpired')
        self.assertEqual(expired.status_code, 200)
        self.assertEqual([i["name"] for i in expired.json()], ["Cheese"])
        self.assertEqual([i["name"] for i in self.client.get('/listNonExpired').json()], ["Milk"])
        self.assertEqual([i["name"] for i in self.client.get('/listExpiringIn7Days').json()], ["Milk"])

        removed = self.client.post('/removeItem/1')
        self.assertEqual(removed.status_code, 201)
        self.assertEqual([i["name"] for i in removed.json()], ["Cheese"])
        self.assertEqual([i["name"] for i in self.client.get('/listAll').json()], ["Cheese"])

    def test_bucket_bounds(self):
        for name, expiry in (("today", "2024-06-01"), ("day7", "2024-06-08"), ("day8", "2024-06-09")):
            self._add(dict(MILK, name=name, expiryDate=expiry))
        self.assertEqual([i["name"] for i in self.client.get('/listExpiringIn7Days').json()], ["today", "day7"])
        self.assertEqual(self.client.get('/listExpired').json(), [])
        self.assertEqual(len(self.client.get('/listNonExpired').json()), 3)

    def test_remove_unknown_id(self):
        self._add(MILK)
        resp = self.client.post('/removeItem/42')
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(len(resp.json()), 1)

    def test_remove_non_numeric_id(self):
        resp = self.client.post('/removeItem/abc')
        self.assertEqual(resp.status_code, 422)

    def test_add_malformed_item(self):
        resp = self.client.post('/addItem', content='{"name": ', headers={"Content-Type": "application/json"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn('detail', resp.json())

        resp = self._add({"name": "Milk", "type": "DRINK"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.client.get('/listAll').json(), [])

    def test_exit_saves_and_restart_reassigns_ids(self):
        self._add(MILK)
        self._add(CHEESE)
        self._add(dict(MILK, name="Juice", expiryDate="2024-06-03"))
        self.client.post('/removeItem/1')
        before = self.client.get('/listAll').json()

        resp = self.client.get('/exit')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.content, b'')
        self.assertTrue(self.db_path.exists())
        # the server keeps serving after /exit
        self.assertEqual(self.client.get('/ping').status_code, 200)

        self.client = self._start()
        after = self.client.get('/listAll').json()
        self.assertEqual([i["id"] for i in after], [1, 2])
        strip = lambda items: [{k: v for k, v in i.items() if k != "id"} for i in items]
        self.assertEqual(strip(after), strip(before))

    def test_exit_write_failure(self):
        self.db_path.mkdir()
        resp = self.client.get('/exit')
        self.assertEqual(resp.status_code, 500)

    def test_add_item_rejects_non_finite_numbers(self):
        bodies = [
            json.dumps(MILK).replace('"price": 3.5', '"price": Infinity'),
            json.dumps(MILK).replace('"measure": 1.0', '"measure": 1e400'),
            json.dumps(CHEESE).replace('"price": 6.25', '"price": NaN'),
        ]
        for body in bodies:
            resp = self.client.post('/addItem', content=body,
                                    headers={"Content-Type": "application/json"})
            self.assertEqual(resp.status_code, 400, body)
        resp = self.client.get('/listAll')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])

        self.assertEqual(self.client.get('/exit').status_code, 200)
        self.assertEqual(json.loads(self.db_path.read_text(encoding="utf-8")), [])


def test_create_app_loads_database_file(tmp_path):
    path = tmp_path / "db.json"
    path.write_text(json.dumps([CHEESE, MILK]), encoding="utf-8")
    client = TestClient(create_app(database_path=path))
    assert [i["id"] for i in client.get('/listAll').json()] == [1, 2]


def test_app_is_only_built_by_the_factory():
    assert not hasattr(api_run, "app")
    assert create_app(catalogue=Catalogue()) is not create_app(catalogue=Catalogue())


if __name__ == '__main__':
    unittest.main()
