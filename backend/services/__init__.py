from .gcs import generate_clip_url, get_bucket_name
from .store import clips, episodes, tracks

__all__ = ["episodes", "tracks", "clips", "generate_clip_url", "get_bucket_name"]
