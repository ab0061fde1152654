import threading
import unittest
from datetime import date

from council_site.news import NewsStore, make_teaser
from council_site.tests.support import ADMIN_AUTH, SiteTestCase


class NewsStoreTests(unittest.TestCase):
    def setUp(self):
        self.store = NewsStore(teaser_length=10, today=lambda: date(2024, 5, 1))

    def test_ids_are_sequential_from_one(self):
        first = self.store.create("Welcome", "Hello students")
        second = self.store.create("Elections", "Voting opens")
        self.assertEqual((first.id, second.id), (1, 2))
        self.assertEqual(first.date, "2024-05-01")

    def test_list_is_newest_first(self):
        for n in range(5):
            self.store.create(f"Item {n}", "body")
        ids = [item.id for item in self.store.list()]
        self.assertEqual(ids, [5, 4, 3, 2, 1])

    def test_teaser_derived_from_title(self):
        short = self.store.create("Short", "body")
        long = self.store.create("A very long headline", "body")
        self.assertEqual(short.teaser, "Short")
        self.assertEqual(long.teaser, "A very lon...")

    def test_explicit_teaser_kept(self):
        item = self.store.create("A very long headline", "body", teaser="Read on")
        self.assertEqual(item.teaser, "Read on")

    def test_missing_fields_rejected(self):
        with self.assertRaises(ValueError):
            self.store.create("", "body")
        with self.assertRaises(ValueError):
            self.store.create("Title", "")
        self.assertEqual(len(self.store), 0)

    def test_concurrent_creates_get_unique_ids(self):
        def worker():
            for _ in range(50):
                self.store.create("t", "c")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        ids = [item.id for item in self.store.list()]
        self.assertEqual(ids, list(range(400, 0, -1)))

    def test_make_teaser_trims_before_ellipsis(self):
        self.assertEqual(make_teaser("abcd efghij", limit=5), "abcd...")


class NewsApiTests(SiteTestCase):
    def test_create_requires_credentials(self):
        response = self.client.post(
            "/admin/news", json={"title": "Exam schedule", "content": "Soon"}
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(len(self.news), 0)

        response = self.client.post(
            "/admin/news",
            json={"title": "Exam schedule", "content": "Soon"},
            auth=("admin", "wrong"),
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.client.get("/api/news").json(), [])

    def test_exam_schedule_example(self):
        response = self.client.post(
            "/admin/news", json={"title": "Exam schedule"}, auth=ADMIN_AUTH
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(len(self.news), 0)

        response = self.client.post(
            "/admin/news",
            json={"title": "Exam schedule", "content": "Finals start Monday"},
            auth=ADMIN_AUTH,
        )
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertTrue(payload["success"])
        self.assertEqual(
            payload["item"],
            {
                "id": 1,
                "title": "Exam schedule",
                "teaser": "Exam schedule",
                "content": "Finals start Monday",
                "date": date.today().isoformat(),
            },
        )

    def test_each_create_appends_next_id(self):
        for expected_id in (1, 2, 3):
            before = len(self.news)
            response = self.client.post(
                "/admin/news",
                json={"title": f"News {expected_id}", "content": "body"},
                auth=ADMIN_AUTH,
            )
            self.assertEqual(response.json()["item"]["id"], expected_id)
            self.assertEqual(len(self.news), before + 1)

    def test_public_list_is_newest_first(self):
        for title in ("First", "Second", "Third"):
            self.client.post(
                "/admin/news",
                data={"title": title, "content": "body"},
                auth=ADMIN_AUTH,
            )
        response = self.client.get("/api/news")
        self.assertEqual(response.status_code, 200)
        items = response.json()
        self.assertEqual([item["title"] for item in items], ["Third", "Second", "First"])
        self.assertEqual([item["id"] for item in items], [3, 2, 1])

    def test_content_is_stored_as_submitted(self):
        content = "  Venue: Main hall\n  Time: 9am\n\n"
        response = self.client.post(
            "/admin/news",
            json={"title": " Orientation ", "content": content},
            auth=ADMIN_AUTH,
        )
        self.assertEqual(response.status_code, 200)
        item = response.json()["item"]
        self.assertEqual(item["content"], content)
        self.assertEqual(item["title"], "Orientation")

    def test_whitespace_only_content_rejected(self):
        response = self.client.post(
            "/admin/news", json={"title": "Title", "content": " \n "}, auth=ADMIN_AUTH
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(len(self.news), 0)

    def test_blank_fields_rejected(self):
        response = self.client.post(
            "/admin/news", json={"title": "  ", "content": "body"}, auth=ADMIN_AUTH
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Title and content are required")


if __name__ == "__main__":
    unittest.main()
