import logging
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from injector import inject
from tqdm import tqdm

from diff_loader import DiffLoader
from diff_source import DiffFetchError, DiffRequest
from render import DiffRenderer
from viewer_state import DiffViewerState


@dataclass
class ViewOptions:
	request: DiffRequest
	selected_index: Optional[int] = None
	show_all: bool = False


@inject
@dataclass
class DiffViewer:
	logger: logging.Logger
	loader: DiffLoader
	renderer: DiffRenderer
	state: DiffViewerState

	def run(self, options: ViewOptions, out: TextIO = sys.stdout) -> int:
		"""
		:returns: The exit code.
		"""
		try:
			self.loader.load(options.request)
		except DiffFetchError:
			print(self.renderer.render(self.state, self.loader.error), file=out)
			return 1

		if options.selected_index is not None and not self.state.select(options.selected_index):
			self.logger.warning("Ignoring file number %d because there are %d file(s).", options.selected_index, len(self.state.diffs))

		if options.show_all:
			print('\n'.join(self.renderer.render_file_list(self.state)), file=out)
			for file_diff in tqdm(self.state.diffs,
				desc="Rendering diffs",
				mininterval=2, unit=" files", file=sys.stderr
			):
				print('', file=out)
				print('\n'.join(self.renderer.render_file_diff(file_diff)), file=out)
		else:
			print(self.renderer.render(self.state), file=out)

		if self.loader.num_skipped > 0:
			self.logger.warning("%d malformed file diff(s) were not shown.", self.loader.num_skipped)
		return 0


def main():
	import argparse

	from injector import Injector

	from config import ConfigModule
	from logger import LoggingModule
	from viewer_module import DiffViewerModule

	parser = argparse.ArgumentParser(
		prog="Diff Viewer",
		description="Show the files changed in a repository and the diff of one of them.",
	)
	parser.add_argument(
		'--config_source',
		type=str,
		required=True,
		help="(required) Path or URL of the configuration file.",
	)
	target = parser.add_mutually_exclusive_group()
	target.add_argument(
		'--commit',
		type=str,
		help="Show the diff introduced by this commit instead of the working directory.",
	)
	target.add_argument(
		'--branches',
		nargs=2,
		metavar=('BASE', 'HEAD'),
		help="Show the diff between two refs instead of the working directory.",
	)
	parser.add_argument(
		'--select',
		type=int,
		help="The 0-based number of the file to show. Defaults to the first file.",
	)
	parser.add_argument(
		'--all',
		action='store_true',
		help="Show the diffs of all of the files.",
	)

	args = parser.parse_args()
	config_source: str = args.config_source

	if args.commit is not None:
		request = DiffRequest.commit(args.commit)
	elif args.branches is not None:
		request = DiffRequest.branches(*args.branches)
	else:
		request = DiffRequest.workdir()

	inj = Injector([
		ConfigModule(config_source),
		LoggingModule,
		DiffViewerModule,
	])
	options = ViewOptions(request, selected_index=args.select, show_all=args.all)
	viewer = inj.get(DiffViewer)
	sys.exit(viewer.run(options))


if __name__ == '__main__':
	main()
