from __future__ import annotations

from typing import Any, Callable, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .errors import CredentialsError


SessionFactory = Callable[..., Any]


def check_credentials(
    profile: str,
    *,
    region: Optional[str] = None,
    session_factory: SessionFactory = boto3.Session,
) -> Dict[str, Any]:
    """Verify the profile resolves to a valid AWS identity.

    Issues a single STS GetCallerIdentity call and returns its response
    (Account, Arn, UserId). Any botocore failure, including an unknown
    profile or missing credentials, raises CredentialsError.
    """
    try:
        session = session_factory(profile_name=profile, region_name=region)
        return session.client("sts").get_caller_identity()
    except (BotoCoreError, ClientError) as e:
        raise CredentialsError(f"AWS credentials not configured for profile: {profile}") from e
