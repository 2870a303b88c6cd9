"""Application context for explicit state passing.

The command handler and the picker receive an AppContext instead of reading
module-level configuration. It is built once at startup and only read
afterwards.
"""

from dataclasses import dataclass

from toggler.core.config import TogglerConfig
from toggler.core.output import notify
from toggler.domain.registry import FeatureRegistry
from toggler.host import Host


@dataclass(frozen=True)
class AppContext:
    """Configuration, feature registry and host for one Toggler session.

    Attributes:
        config: Loaded configuration
        host: Host the features act upon
        registry: Features from config, in configured order
    """

    config: TogglerConfig
    host: Host
    registry: FeatureRegistry

    @classmethod
    def create(cls, config: TogglerConfig, host: Host) -> "AppContext":
        """Create the context and report any problems found while loading config.

        Args:
            config: Loaded configuration
            host: Host the features act upon

        Returns:
            New AppContext
        """
        ctx = cls(config=config, host=host, registry=FeatureRegistry(config.features))
        for error in config.errors:
            ctx.notify(error, "error")
        return ctx

    def notify(self, message: str, level: str = "info") -> None:
        notify(self.host, message, level)
