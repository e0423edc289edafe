"""
Deployment of the static marketing site to S3 website hosting.

Modules:
- cli: argument parsing and process exit codes
- runner: the ordered deployment sequence
- commands: AWS CLI command builders and the subprocess runner
- credentials: STS identity check through boto3
- validation: content markers, SEO and basic HTML checks
- config: deploy target configuration and CLI options
"""

from .config import DeployConfig, DeployOptions, DeployResult
from .errors import DeployError

__all__ = ["DeployConfig", "DeployOptions", "DeployResult", "DeployError"]
