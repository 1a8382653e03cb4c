"""Driver definitions - register all supported quality drivers."""

from diffgate.quality import parsers
from diffgate.quality.drivers import EslintDriver, RegexBasedDriver, XmlQualityDriver
from diffgate.quality.registry import registry

# =============================================================================
# JavaScript / TypeScript
# =============================================================================

registry.register(EslintDriver())

# =============================================================================
# Python
# =============================================================================

registry.register(
    RegexBasedDriver(
        name="pylint",
        supported_extensions=["py"],
        command=[
            "pylint",
            "--msg-template={path}:{line}: [{msg_id}({symbol}), {obj}] {msg}",
            "--reports=n",
        ],
        expression=r"^([^:]+):(\d+): (.*)$",
        # Bit mask of message categories; 32 is a usage error
        exit_codes=list(range(32)),
    )
)

registry.register(
    RegexBasedDriver(
        name="flake8",
        supported_extensions=["py"],
        command=["flake8"],
        expression=r"^([^:]+):(\d+):\d+: (.*)$",
        exit_codes=[0, 1],
    )
)

registry.register(
    RegexBasedDriver(
        name="ruff",
        supported_extensions=["py", "pyi"],
        command=["ruff", "check", "--output-format=concise", "--no-cache"],
        expression=r"^([^:]+):(\d+):\d+: (.*)$",
        exit_codes=[0, 1],
    )
)

registry.register(
    RegexBasedDriver(
        name="mypy",
        supported_extensions=["py", "pyi"],
        command=["mypy", "--no-error-summary", "--no-pretty"],
        expression=r"^([^:]+):(\d+):(?:\d+:)? (?:error|warning): (.*)$",
        exit_codes=[0, 1],
    )
)

# =============================================================================
# Shell / C / C++
# =============================================================================

registry.register(
    RegexBasedDriver(
        name="shellcheck",
        supported_extensions=["sh", "bash", "ksh", "zsh"],
        command=["shellcheck", "--format=gcc"],
        expression=r"^([^:]+):(\d+):\d+: (.*)$",
        exit_codes=[0, 1],
    )
)

registry.register(
    RegexBasedDriver(
        name="cppcheck",
        supported_extensions=["c", "cpp", "h", "hpp"],
        command=["cppcheck", "--template={file}:{line}: {message}", "--quiet"],
        expression=r"^([^:]+):(\d+): (.*)$",
        # cppcheck prints its findings on stderr
        output_stderr=True,
    )
)

# =============================================================================
# Java (report-only)
# =============================================================================

registry.register(
    XmlQualityDriver(
        name="checkstyle",
        supported_extensions=["java"],
        command=["checkstyle"],
        parse_xml=parsers.parse_checkstyle,
    )
)

registry.register(
    XmlQualityDriver(
        name="findbugs",
        supported_extensions=["java"],
        command=["findbugs"],
        parse_xml=parsers.parse_findbugs,
    )
)
