from typing import Optional, TypedDict

DEFAULT_LINENO_WIDTH = 4
DEFAULT_MAX_FETCH_TRIES = 1
DEFAULT_REQUEST_TIMEOUT_S = 30


class Config(TypedDict):
	diff_source: str
	"""
	Either the base URL of the backend (starting with "http://" or "https://") or the path to a JSON file with diffs.
	"""

	repo_path: str
	"""
	The path of the repository that the backend should compute diffs for.
	Defaults to ".".
	"""

	log_level: Optional[str]

	max_fetch_tries: int
	"""
	The number of times to try to fetch a diff set before giving up.
	Defaults to 1 which means that failures are not retried.
	"""

	request_timeout_s: int

	ignore_stale_responses: bool
	"""
	When `True`, a diff set that arrives after a newer request was already applied is dropped.
	Otherwise, the last diff set to arrive is shown.
	Defaults to `False`.
	"""

	lineno_width: int

	use_color: bool
