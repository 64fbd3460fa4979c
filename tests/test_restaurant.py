"""
Unit tests for the restaurant login flow and slot codes.
"""

import unittest

from fakes import FakeResponse, FakeSession
from fixture_site import BOOKING_HTML, DINNER_URL, build_session
from weekendplanner.config import Credentials
from weekendplanner.errors import AuthFailure, NetworkFailure, ParseFailure
from weekendplanner.fetch import Fetcher
from weekendplanner.model import TableSlot
from weekendplanner.restaurant import authenticate, login_url, parse_slot_codes

CREDS = Credentials("zeke", "coys")


class TestAuthenticate(unittest.TestCase):
    def test_login_follows_redirect_with_cookie(self) -> None:
        session = build_session()
        html = authenticate(Fetcher(session=session), DINNER_URL, CREDS)
        self.assertEqual(html, BOOKING_HTML)

        method, url, kwargs = session.calls[0]
        self.assertEqual((method, url), ("POST", "http://fixture.test/dinner/login"))
        self.assertEqual(kwargs["json"], {"username": "zeke", "password": "coys"})
        self.assertFalse(kwargs["allow_redirects"])

        method, url, kwargs = session.calls[1]
        self.assertEqual((method, url), ("GET", "http://fixture.test/dinner/login/booking"))
        self.assertEqual(kwargs["headers"], {"Cookie": "connect.sid=s%3Aabc123"})

    def test_injected_credentials_are_sent(self) -> None:
        session = build_session()
        authenticate(Fetcher(session=session), DINNER_URL, Credentials("someone", "secret"))
        self.assertEqual(session.calls[0][2]["json"], {"username": "someone", "password": "secret"})

    def test_absolute_location(self) -> None:
        session = FakeSession()
        session.add("POST", "http://r.test/dinner/login", FakeResponse(
            status_code=302, headers={"Set-Cookie": "sid=1", "Location": "/dinner/tables"},
        ))
        session.add("GET", "http://r.test/dinner/tables", FakeResponse("<p>tables</p>"))
        self.assertEqual(authenticate(Fetcher(session=session), "http://r.test/dinner", CREDS), "<p>tables</p>")

    def test_missing_cookie_raises(self) -> None:
        session = FakeSession()
        session.add("POST", "http://r.test/login", FakeResponse(status_code=302, headers={"Location": "booking"}))
        with self.assertRaises(AuthFailure):
            authenticate(Fetcher(session=session), "http://r.test/", CREDS)

    def test_missing_location_raises(self) -> None:
        session = FakeSession()
        session.add("POST", "http://r.test/login", FakeResponse(status_code=302, headers={"Set-Cookie": "sid=1"}))
        with self.assertRaises(AuthFailure):
            authenticate(Fetcher(session=session), "http://r.test/", CREDS)

    def test_rejected_login_is_network_failure(self) -> None:
        session = FakeSession()
        session.add("POST", "http://r.test/login", FakeResponse("Unauthorized", status_code=401))
        with self.assertRaises(NetworkFailure):
            authenticate(Fetcher(session=session), "http://r.test/", CREDS)

    def test_login_url(self) -> None:
        self.assertEqual(login_url("http://r.test/dinner/"), "http://r.test/dinner/login")


class TestSlotCodes(unittest.TestCase):
    def test_parse_codes(self) -> None:
        self.assertEqual(parse_slot_codes(BOOKING_HTML), ["fri1416", "fri1820", "fri2022", "sat1820", "sun1820"])

    def test_other_inputs_ignored(self) -> None:
        html = '<input name="group2" value="fri1820"><input name="group1" value="sat1618">'
        self.assertEqual(parse_slot_codes(html), ["sat1618"])

    def test_decode_code(self) -> None:
        slot = TableSlot.from_code("fri1820")
        self.assertEqual(slot, TableSlot("fri", 18, 20))
        self.assertEqual(slot.window, "18-20")

    def test_decode_drops_leading_zero(self) -> None:
        self.assertEqual(TableSlot.from_code("SUN0911").window, "9-11")

    def test_decode_rejects_non_ascii_digits(self) -> None:
        with self.assertRaises(ParseFailure):
            TableSlot.from_code("fri\u00b2820")

    def test_decode_invalid(self) -> None:
        with self.assertRaises(ParseFailure):
            TableSlot.from_code("friXX20")


if __name__ == "__main__":
    unittest.main()
