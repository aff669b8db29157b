"""Global configuration: fixed file conventions and the settings model."""

from pydantic import BaseModel, ConfigDict

# Module identifier of the tracked dependency in go.mod
MODULE_PATH = "go.kwusen.ca/vgn"

# Module manifest, relative to the checked repository root
MANIFEST_FILE = "go.mod"

# Submodule registry, relative to the checked repository root
REGISTRY_FILE = ".gitmodules"

# Marker file inside each registered submodule recording the vgn version
# that submodule's content corresponds to.
MARKER_FILE = "vgn-version.txt"


class CheckerSettings(BaseModel):
    """File conventions used by a single checker run.

    The command line always uses the defaults; library callers may point
    the checker at another layout.
    """

    model_config = ConfigDict(frozen=True)

    module_path: str = MODULE_PATH
    manifest_file: str = MANIFEST_FILE
    registry_file: str = REGISTRY_FILE
    marker_file: str = MARKER_FILE
