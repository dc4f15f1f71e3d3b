import os
import subprocess
import sys

from django.conf import settings
from django.test import SimpleTestCase


class AppLoadingTest(SimpleTestCase):
    """Settings and every app's models load in a fresh interpreter."""

    def test_django_setup_in_clean_process(self):
        env = dict(
            os.environ,
            DJANGO_SETTINGS_MODULE='logistics_core.test_settings',
            DJANGO_SECRET_KEY='test-only',
        )
        result = subprocess.run(
            [
                sys.executable, '-c',
                'import django; django.setup(); '
                'import truck_requests.models, yard.models, accounts.permissions, logistics_core.urls',
            ],
            cwd=settings.BASE_DIR,
            env=env,
            capture_output=True,
            text=True,
            timeout=60,
        )
        self.assertEqual(result.returncode, 0, result.stderr)
