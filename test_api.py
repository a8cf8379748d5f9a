"""
HTTP API tests using FastAPI's TestClient.
"""

import unittest

from fastapi.testclient import TestClient

import api.app as app_module
from arena import create_sample_scenario


class TestBattleApi(unittest.TestCase):
    def setUp(self) -> None:
        app_module.runner = None
        self.client = TestClient(app_module.app)

    def tearDown(self) -> None:
        app_module.runner = None

    def test_status_without_battle(self) -> None:
        response = self.client.get("/status")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"active": False})

    def test_step_without_battle(self) -> None:
        response = self.client.post("/step")
        self.assertEqual(response.status_code, 400)

    def test_start_and_step(self) -> None:
        response = self.client.post("/start", json={"scenario": create_sample_scenario().to_dict()})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["frame"]["completed_rounds"], 0)

        frame = self.client.post("/step").json()
        self.assertEqual(frame["round"]["round_number"], 1)
        self.assertFalse(frame["done"])

        status = self.client.get("/status").json()
        self.assertEqual(status, {"active": True, "round": 1, "done": False})

    def test_step_until_done(self) -> None:
        self.client.post("/start", json={"scenario": {"map": "EG.\n...\n", "hit_points": 3}})
        frame = self.client.post("/step").json()
        self.assertTrue(frame["done"])
        self.assertEqual(frame["outcome"]["winner"], "ELF")

        response = self.client.post("/step")
        self.assertEqual(response.status_code, 400)

    def test_start_with_bad_map(self) -> None:
        response = self.client.post("/start", json={"scenario": {"map": "E?G\n...\n"}})
        self.assertEqual(response.status_code, 400)
        self.assertIn("Invalid map", response.json()["detail"])

    def test_start_without_map(self) -> None:
        response = self.client.post("/start", json={"scenario": {"hit_points": 10}})
        self.assertEqual(response.status_code, 400)

    def test_simulate(self) -> None:
        response = self.client.post("/simulate", json={"map": create_sample_scenario().map_text})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["completed_rounds"], 47)
        self.assertEqual(body["remaining_hit_points"], 590)
        self.assertEqual(body["score"], 27730)
        self.assertEqual(body["winner"], "GOBLIN")
        self.assertEqual(body["verdict"], "defeat")

    def test_simulate_with_boost(self) -> None:
        body = self.client.post(
            "/simulate",
            json={"map": create_sample_scenario().map_text, "elf_attack_boost": 12},
        ).json()
        self.assertEqual(body["score"], 4988)
        self.assertEqual(body["verdict"], "victory")

    def test_simulate_validation(self) -> None:
        response = self.client.post("/simulate", json={"map": "EG\n..\n", "elf_attack_boost": -1})
        self.assertEqual(response.status_code, 422)

        response = self.client.post("/simulate", json={"map": "EG"})
        self.assertEqual(response.status_code, 400)

    def test_boost(self) -> None:
        response = self.client.post(
            "/boost",
            json={"map": create_sample_scenario().map_text, "start": 10, "max_boost": 14},
        )
        body = response.json()
        self.assertTrue(body["found"])
        self.assertEqual(body["boost"], 12)
        self.assertEqual(body["attempts"], 3)
        self.assertEqual(body["outcome"]["score"], 4988)

    def test_boost_not_found(self) -> None:
        body = self.client.post("/boost", json={"map": "E#G\n.#.\n", "max_boost": 2}).json()
        self.assertEqual(body, {"found": False})


if __name__ == "__main__":
    unittest.main()
