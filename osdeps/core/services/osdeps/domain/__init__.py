"""
L1 Domain — ``__init__.py`` re-exports all pure domain functions.

These functions have NO subprocess calls, NO filesystem access.
Pure input→output (the confirmation gate's manual branch excepted,
which reads one line from the user).
"""

from osdeps.core.services.osdeps.domain.command_template import (  # noqa: F401
    expand,
    generate,
    generate_auto_script,
    generate_user_script,
)
from osdeps.core.services.osdeps.domain.confirmation import (  # noqa: F401
    Decision,
    InstallMode,
    confirm_install,
    decide,
    resolve_install_mode,
)
from osdeps.core.errors import (  # noqa: F401
    ConfigurationError,
    InstallFailure,
    OsdepsError,
    QueryFailure,
    ResolutionAmbiguity,
)
from osdeps.core.services.osdeps.domain.output_parsing import (  # noqa: F401
    OutputLine,
    OutputTable,
    parse_line,
    parse_output,
)
