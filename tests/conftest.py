import os
import sys

import pytest


DEPLOY_ENV_VARS = ("WAVES_S3_BUCKET", "WAVES_CLOUDFRONT_DISTRIBUTION_ID")


def pytest_configure():
    # `deploy`, `browser` and `common` are imported as top-level packages from `src/`
    root = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    src_path = os.path.join(root, "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


@pytest.fixture(autouse=True)
def _isolated_deploy_env(monkeypatch: pytest.MonkeyPatch):
    """Tests start without the developer's deploy overrides."""
    for name in DEPLOY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
