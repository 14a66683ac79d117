"""Registry layer: the cross-referenced schema and its queries.

The registry may import from domain and config models. It must never
import from services, infrastructure, commands, or output.
"""

from protodocs.registry.daemon import Daemon, ExperimentalService, FileRepoUrl, RestEndpoint

__all__ = ["Daemon", "ExperimentalService", "FileRepoUrl", "RestEndpoint"]
