"""
Fetches diff sets from the backend that computes them.
"""

from dataclasses import dataclass
import json
import logging
import time
from typing import Optional

from injector import inject
import requests

from config import Config

DIFF_WORKDIR = 'diff_workdir'
DIFF_COMMIT = 'diff_commit'
DIFF_BRANCHES = 'diff_branches'


class DiffFetchError(Exception):
	"""
	The diff set could not be fetched.
	`str(e)` is the message from the backend or the transport.
	"""


@dataclass(frozen=True)
class DiffRequest:
	command: str
	commit_sha: Optional[str] = None
	base_ref: Optional[str] = None
	head_ref: Optional[str] = None

	@classmethod
	def workdir(cls) -> 'DiffRequest':
		return cls(DIFF_WORKDIR)

	@classmethod
	def commit(cls, commit_sha: str) -> 'DiffRequest':
		return cls(DIFF_COMMIT, commit_sha=commit_sha)

	@classmethod
	def branches(cls, base_ref: str, head_ref: str) -> 'DiffRequest':
		return cls(DIFF_BRANCHES, base_ref=base_ref, head_ref=head_ref)

	def describe(self) -> str:
		match self.command:
			case 'diff_commit':
				return f"commit {self.commit_sha}"
			case 'diff_branches':
				return f"{self.base_ref}..{self.head_ref}"
		return "working directory"


def _is_url(source: str) -> bool:
	return source.startswith('https://') or source.startswith('http://')


def _error_message(response: requests.Response) -> str:
	"""
	The backend sends errors as `{"kind": "...", "message": "..."}`.
	"""
	try:
		body = response.json()
	except ValueError:
		body = None
	if isinstance(body, dict) and isinstance(message := body.get('message'), str):
		return message
	return response.text or f"{response.status_code} {response.reason}"


def _get_section(data: dict, key: str) -> dict:
	section = data.get(key)
	if section is None:
		return {}
	if not isinstance(section, dict):
		raise DiffFetchError(f"`{key}` must be an object. Got: {type(section).__name__}")
	return section


@inject
@dataclass
class DiffSource:
	config: Config
	logger: logging.Logger

	def fetch(self, request: DiffRequest) -> list:
		"""
		:returns: The raw diff set: one JSON object per changed file.
		:raises DiffFetchError: If the diff set could not be fetched.
		"""
		source = self.config['diff_source']
		max_num_tries = self.config['max_fetch_tries']
		for try_num in range(max_num_tries):
			try:
				if _is_url(source):
					result = self._fetch_url(source, request)
				else:
					result = self._fetch_file(source, request)
				break
			except DiffFetchError:
				if try_num == max_num_tries - 1:
					raise
				self.logger.exception("Error while fetching the diff for the %s from '%s'.", request.describe(), source)
				time.sleep(1 + try_num * 2)

		if not isinstance(result, list):
			raise DiffFetchError(f"Expected a list of file diffs. Got: {type(result).__name__}")
		self.logger.debug("Fetched %d file diff(s) for the %s.", len(result), request.describe())
		return result

	def _fetch_url(self, base_url: str, request: DiffRequest) -> object:
		params = {'repoPath': self.config['repo_path']}
		if request.commit_sha is not None:
			params['commitSha'] = request.commit_sha
		if request.base_ref is not None:
			params['baseRef'] = request.base_ref
		if request.head_ref is not None:
			params['headRef'] = request.head_ref
		url = f'{base_url}/{request.command}'
		self.logger.debug("Getting '%s' with %s.", url, params)
		try:
			r = requests.get(url, params=params, timeout=self.config['request_timeout_s'])
		except requests.RequestException as e:
			raise DiffFetchError(str(e)) from e
		if not r.ok:
			raise DiffFetchError(_error_message(r))
		try:
			return r.json()
		except (ValueError, RecursionError) as e:
			raise DiffFetchError(f"Invalid JSON from '{url}': {e}") from e

	def _fetch_file(self, path: str, request: DiffRequest) -> object:
		"""
		The file is either a list for the working directory
		or an object with "workdir", "commits" (by SHA), and "branches" (by "base..head").
		"""
		try:
			with open(path, 'r', encoding='utf-8') as f:
				data = json.load(f)
		except (OSError, ValueError, RecursionError) as e:
			raise DiffFetchError(str(e)) from e

		if isinstance(data, list):
			if request.command != DIFF_WORKDIR:
				raise DiffFetchError(f"'{path}' only has a diff for the working directory.")
			return data
		if not isinstance(data, dict):
			return data

		match request.command:
			case 'diff_commit':
				diffs = _get_section(data, 'commits').get(request.commit_sha)
			case 'diff_branches':
				diffs = _get_section(data, 'branches').get(f'{request.base_ref}..{request.head_ref}')
			case _:
				diffs = data.get('workdir')
		if diffs is None:
			raise DiffFetchError(f"No diff for the {request.describe()} in '{path}'.")
		return diffs
