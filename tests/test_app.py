import json
import unittest

from app import app as flask_app  # noqa: E402
import app as app_mod             # noqa: E402
from game import Config, GameSession, ManualTicker, ThreadTicker  # noqa: E402


class ClientClockConfig(Config):
    ROUND_DURATION_SEC = 180
    CLOCK_MODE = 'client'


class TestFlaskAPI(unittest.TestCase):
    def setUp(self):
        # Swap in a session on a manual clock so no countdown thread runs
        self.session = GameSession(ClientClockConfig, ticker=ManualTicker())
        self._orig_session = app_mod.set_session(self.session)
        self.client = flask_app.test_client()

    def tearDown(self):
        self.session.close()
        app_mod.set_session(self._orig_session)

    def _post(self, path, payload=None):
        return self.client.post(path, data=json.dumps(payload or {}), content_type="application/json")

    def test_given_index_and_static_assets_when_requested_then_html_and_correct_mime(self):
        r = self.client.get("/")
        self.assertEqual(r.status_code, 200)
        self.assertIn(b"canvas", r.data)

        rjs = self.client.get("/main.js")
        self.assertEqual(rjs.status_code, 200)
        self.assertIn("application/javascript", rjs.headers.get("Content-Type", ""))

        rcss = self.client.get("/styles.css")
        self.assertEqual(rcss.status_code, 200)
        self.assertIn("text/css", rcss.headers.get("Content-Type", ""))

    def test_given_fresh_session_when_state_requested_then_empty_grid_and_full_clock(self):
        r = self.client.get("/api/state")
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertTrue(data["ok"])
        self.assertTrue(data["clientClock"])
        self.assertIsNone(data["lastOutcome"])
        state = data["state"]
        self.assertEqual(state["grid"], [[0, 0, 0], [0, 0, 0], [0, 0, 0]])
        self.assertEqual(state["activePlayer"], 1)
        self.assertEqual(state["timeLeft"], 180)
        self.assertEqual(state["clock"], "03:00")
        self.assertEqual(state["round"], 1)
        self.assertEqual(state["scores"], {"1": 0, "2": 0})

    def test_given_winning_moves_when_posted_then_outcome_returned_and_round_restarted(self):
        for column, row in [(0, 0), (0, 1), (1, 0), (1, 1)]:
            r = self._post("/api/move", {"column": column, "row": row})
            self.assertEqual(r.status_code, 200)
            self.assertIsNone(r.get_json()["outcome"])
        r = self._post("/api/move", {"column": 2, "row": 0})
        d = r.get_json()
        self.assertTrue(d["ok"])
        self.assertEqual(d["outcome"], {"winner": 1, "reason": "win", "scores": {"1": 1, "2": 0}, "round": 1})
        self.assertEqual(d["state"]["round"], 2)
        self.assertEqual(d["state"]["scores"], {"1": 1, "2": 0})
        self.assertEqual(d["state"]["grid"], [[0, 0, 0], [0, 0, 0], [0, 0, 0]])

        last = self.client.get("/api/state").get_json()["lastOutcome"]
        self.assertEqual(last["winner"], 1)

    def test_given_occupied_cell_when_posted_then_409_and_turn_kept(self):
        self._post("/api/move", {"column": 0, "row": 0})
        r = self._post("/api/move", {"column": 0, "row": 0})
        self.assertEqual(r.status_code, 409)
        d = r.get_json()
        self.assertFalse(d["ok"])
        self.assertIn("Cell already taken", d["error"])
        self.assertEqual(d["state"]["grid"][0][0], 1)
        self.assertEqual(d["state"]["activePlayer"], 2)

    def test_given_bad_coordinates_when_posted_then_400(self):
        r = self._post("/api/move", {"column": 3, "row": 0})
        self.assertEqual(r.status_code, 400)
        self.assertFalse(r.get_json()["ok"])
        r = self._post("/api/move", {"column": "a", "row": 0})
        self.assertEqual(r.status_code, 400)
        r = self._post("/api/move", {"column": 1})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(self.session.view().active_player, 1)

    def test_given_pointer_position_when_posted_then_mapped_to_cell(self):
        r = self._post("/api/move", {"x": 299, "y": 10, "width": 300, "height": 300})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.get_json()["state"]["grid"][2][0], 1)
        r = self._post("/api/move", {"x": 10, "y": 10, "width": 0, "height": 300})
        self.assertEqual(r.status_code, 400)
        r = self._post("/api/move", {"x": "left", "y": 10, "width": 300, "height": 300})
        self.assertEqual(r.status_code, 400)

    def test_given_non_finite_pointer_when_posted_then_400(self):
        for payload in (
            {"x": 1e400, "y": 10, "width": 300, "height": 300},
            {"x": 10, "y": 10, "width": 300, "height": "nan"},
            {"x": "-inf", "y": 10, "width": 300, "height": 300},
        ):
            r = self._post("/api/move", payload)
            self.assertEqual(r.status_code, 400)
            self.assertFalse(r.get_json()["ok"])
        self.assertEqual(self.session.view().active_player, 1)

    def test_given_huge_pointer_on_tiny_surface_when_posted_then_clamped_to_edge_cell(self):
        r = self._post("/api/move", {"x": 1e308, "y": 0, "width": 1e-10, "height": 300})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.get_json()["state"]["grid"][2][0], 1)

    def test_given_client_clock_when_ticked_to_zero_then_timeout_outcome(self):
        r = self._post("/api/tick")
        self.assertEqual(r.get_json()["state"]["timeLeft"], 179)
        r = self._post("/api/tick", {"times": 178})
        d = r.get_json()
        self.assertEqual(d["state"]["clock"], "00:01")
        self.assertIsNone(d["outcome"])
        r = self._post("/api/tick")
        d = r.get_json()
        self.assertEqual(d["outcome"]["reason"], "timeout")
        self.assertIsNone(d["outcome"]["winner"])
        self.assertEqual(d["state"]["timeLeft"], 180)
        self.assertEqual(d["state"]["round"], 2)

    def test_given_bad_tick_count_when_posted_then_400(self):
        for bad in (0, -2, "3", True, 181, 10 ** 12):
            r = self._post("/api/tick", {"times": bad})
            self.assertEqual(r.status_code, 400)
        self.assertEqual(self.client.get("/api/state").get_json()["state"]["timeLeft"], 180)

    def test_given_server_clock_when_tick_posted_then_409(self):
        server_session = GameSession(ClientClockConfig, ticker=ThreadTicker(interval=3600))
        app_mod.set_session(server_session)
        try:
            r = self._post("/api/tick")
            self.assertEqual(r.status_code, 409)
            self.assertFalse(self.client.get("/api/state").get_json()["clientClock"])
        finally:
            server_session.close()
            app_mod.set_session(self.session)

    def test_given_round_in_progress_when_new_requested_then_restart_without_credit(self):
        self._post("/api/move", {"column": 1, "row": 1})
        r = self._post("/api/new")
        d = r.get_json()
        self.assertTrue(d["ok"])
        self.assertEqual(d["outcome"]["reason"], "restart")
        self.assertIsNone(d["outcome"]["winner"])
        self.assertEqual(d["state"]["scores"], {"1": 0, "2": 0})
        self.assertEqual(d["state"]["grid"][1][1], 0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
