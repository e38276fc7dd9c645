from injector import Module, singleton

from diff_loader import DiffLoader
from diff_source import DiffSource
from viewer_state import DiffViewerState


class DiffViewerModule(Module):
    def configure(self, binder):
        # The loader and the renderer must see the same state.
        binder.bind(DiffViewerState, scope=singleton)
        binder.bind(DiffSource, scope=singleton)
        binder.bind(DiffLoader, scope=singleton)
