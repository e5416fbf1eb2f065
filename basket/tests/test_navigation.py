import unittest

from basket.logic.navigation import ViewState, navigate_to


class TestNavigation(unittest.TestCase):

    def test_simple_routes(self):
        self.assertEqual(navigate_to("shopping").url, "/shopping-list")
        self.assertEqual(navigate_to("archive").url, "/archive")

    def test_parameters(self):
        state = navigate_to("archive-detail", {"entryId": "a b"})
        self.assertEqual(state.url, "/archive/a%20b")
        self.assertEqual(state.to_dict(), {"route": "archive-detail", "params": {"entryId": "a b"},
                                           "url": "/archive/a%20b"})

    def test_errors(self):
        with self.assertRaises(KeyError):
            navigate_to("nowhere")
        with self.assertRaises(KeyError):
            navigate_to("recipe-detail")

    def test_view_state_is_immutable(self):
        state = ViewState("shopping")
        with self.assertRaises(AttributeError):
            state.route = "archive"
