import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Optional

from injector import inject

from config import Config
from diff_decoder import DiffDecoder
from diff_source import DiffFetchError, DiffRequest, DiffSource
from viewer_state import DiffViewerState


@inject
@dataclass
class DiffLoader:
	"""
	Fetches diff sets and applies them to the viewer state.
	When several loads overlap, the one that finishes last is applied,
	unless `ignore_stale_responses` is set, in which case a load that was started before the last applied one is dropped.
	"""
	config: Config
	logger: logging.Logger
	source: DiffSource
	decoder: DiffDecoder
	state: DiffViewerState

	error: Optional[str] = field(default=None, init=False)
	"""
	The message of the last failed load.
	Cleared when a load starts.
	"""
	num_skipped: int = field(default=0, init=False)
	"""
	The number of malformed entries dropped from the last applied diff set.
	"""
	committed_request_num: int = field(default=0, init=False)
	num_in_flight: int = field(default=0, init=False)

	_request_nums: itertools.count = field(default_factory=lambda: itertools.count(1), init=False, repr=False)
	_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

	@property
	def is_loading(self) -> bool:
		return self.num_in_flight > 0

	def load(self, request: Optional[DiffRequest] = None) -> bool:
		"""
		:returns: `True` if the fetched diff set was applied to the state.
		:raises DiffFetchError: If fetching failed. The state is not changed.
		"""
		if request is None:
			request = DiffRequest.workdir()
		with self._lock:
			request_num = next(self._request_nums)
			self.num_in_flight += 1
			self.error = None

		try:
			try:
				raw_diffs = self.source.fetch(request)
			except DiffFetchError as e:
				with self._lock:
					self.error = str(e)
				self.logger.error("Failed to load the diff for the %s: %s", request.describe(), e)
				raise

			decoded = self.decoder.decode(raw_diffs)

			with self._lock:
				if self.config.get('ignore_stale_responses') and request_num < self.committed_request_num:
					self.logger.debug("Dropping the diff for request %d because request %d was already applied.", request_num, self.committed_request_num)
					return False
				self.state.reload(decoded.diffs)
				self.committed_request_num = request_num
				self.num_skipped = decoded.num_skipped
		finally:
			with self._lock:
				self.num_in_flight -= 1

		self.logger.info("Loaded %d file diff(s) for the %s.", len(decoded.diffs), request.describe())
		return True
