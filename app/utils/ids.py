"""Id generation for filtering runs. Ids only correlate log lines; they are not persisted."""

import uuid


def generate_uuid_prefix(prefix: str) -> str:
    """Generate a unique id with prefix, e.g. run_<uuid>."""
    return f"{prefix}_{uuid.uuid4().hex[:24]}"


def generate_run_id() -> str:
    """Generate a unique id for one filtering run."""
    return generate_uuid_prefix("run")
