"""Builds the components of one invocation from its settings."""

from dataclasses import dataclass, field

from dockrsync.core.excludes import ExcludeFiles
from dockrsync.core.services import ContainerLocator, ServiceResolver
from dockrsync.core.transport import TransportBuilder
from dockrsync.notifier import StatusNotifier
from dockrsync.settings import Settings
from dockrsync.sync.rsync import ContainerSynchronizer
from dockrsync.sync.watch import WatchLoop
from dockrsync.utils.paths import ProjectPaths


@dataclass
class Runtime:
    """Settings plus the components wired from them."""

    settings: Settings
    paths: ProjectPaths
    resolver: ServiceResolver = field(init=False)
    locator: ContainerLocator = field(init=False)
    transport_builder: TransportBuilder = field(init=False)
    excludes: ExcludeFiles = field(init=False)
    notifier: StatusNotifier = field(init=False)

    def __post_init__(self) -> None:
        self.resolver = ServiceResolver(self.settings)
        self.locator = ContainerLocator(self.settings, self.paths.root_dir)
        self.transport_builder = TransportBuilder()
        self.excludes = ExcludeFiles(self.paths)
        self.notifier = StatusNotifier(self.settings.notifier_port)

    @classmethod
    def load(cls, paths: ProjectPaths) -> "Runtime":
        """Load the project's settings; raises SettingsMissing without a settings file."""
        return cls(settings=Settings.load(paths.settings_file), paths=paths)

    def synchronizer(self) -> ContainerSynchronizer:
        return ContainerSynchronizer(
            settings=self.settings,
            paths=self.paths,
            resolver=self.resolver,
            locator=self.locator,
            transport_builder=self.transport_builder,
            excludes=self.excludes,
            notifier=self.notifier,
        )

    def watch_loop(self) -> WatchLoop:
        return WatchLoop(self.synchronizer(), self.notifier)

    def container_transport(self, service, interactive: bool):
        """Resolve a service all the way to a transport of the requested kind."""
        container_id = self.locator.locate(self.resolver.resolve(service))
        return self.transport_builder.build(container_id, interactive=interactive)
