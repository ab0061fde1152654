import shutil
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from council_site.app import create_app
from council_site.config import Settings, get_settings
from council_site.dependencies import get_mailer, get_news_store, get_storage_client
from council_site.mailer import InMemoryMailer
from council_site.news import NewsStore
from council_site.storage import InMemoryStorageClient

ADMIN_AUTH = ("admin", "s3cret")


class SiteTestCase(unittest.TestCase):
    """Builds an app wired to in-memory collaborators and a temp public dir."""

    def setUp(self):
        self.public_dir = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.public_dir, ignore_errors=True)
        (self.public_dir / "index.html").write_text("<h1>Home</h1>")
        (self.public_dir / "css").mkdir()
        (self.public_dir / "css" / "site.css").write_text("body { margin: 0; }")
        self.templates_dir = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.templates_dir, ignore_errors=True)
        (self.templates_dir / "admin.html").write_text("<h1>Admin</h1>")

        self.settings = Settings(
            _env_file=None,
            public_dir=str(self.public_dir),
            templates_dir=str(self.templates_dir),
            admin_password=ADMIN_AUTH[1],
            use_in_memory_backends=True,
        )
        self.mailer = InMemoryMailer(sender_address="site@vvu.edu.gh")
        self.storage = InMemoryStorageClient()
        self.news = NewsStore(teaser_length=self.settings.news_teaser_length)

        self.app = create_app()
        self.app.dependency_overrides[get_settings] = lambda: self.settings
        self.app.dependency_overrides[get_mailer] = lambda: self.mailer
        self.app.dependency_overrides[get_storage_client] = lambda: self.storage
        self.app.dependency_overrides[get_news_store] = lambda: self.news
        self.client = TestClient(self.app)
