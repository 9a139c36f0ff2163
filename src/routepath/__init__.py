"""routepath: path-pattern matching and path generation for client-side routing.

All public types are exported from this module for flat imports:

    from routepath import match_path, generate_path, MatchOptions, PatternCache
"""

__version__ = "0.1.0"

# Compiled patterns and caches, see routepath._cache for the cache policy
from routepath._cache import (
    CACHE_LIMIT,
    PatternCache,
    TemplateCache,
    default_cache,
    default_template_cache,
)
from routepath._compiler import (
    MAX_PATTERN_LENGTH,
    CompiledPattern,
    PathTemplate,
    Recognizer,
    compile_pattern,
    compile_template,
    parse,
)

# Route table config, see routepath._config for the accepted shape
from routepath._config import (
    MAX_ROUTES,
    LocationConfig,
    RedirectConfig,
    RouteConfig,
    RouteTableConfig,
    parse_route_config,
)

# Errors
from routepath._errors import (
    ConfigParseError,
    InvalidParameterError,
    InvalidPatternError,
    MissingParameterError,
    ParameterError,
    PatternTooLongError,
    RoutePathError,
)

# Matching and generation
from routepath._generate import generate_path
from routepath._match import MatchResult, PathMatcher, match_path, root_match

# Routes
from routepath._route import Entry, Location, Redirect, Route, switch
from routepath._table import RouteTable, load_route_table, load_route_table_yaml
from routepath._types import Key, MatchOptions, Params, PathSpec

__all__ = [
    # Types
    "MatchOptions",
    "PathSpec",
    "Params",
    "Key",
    # Matching and generation
    "MatchResult",
    "PathMatcher",
    "match_path",
    "root_match",
    "generate_path",
    # Compiler
    "CompiledPattern",
    "PathTemplate",
    "Recognizer",
    "compile_pattern",
    "compile_template",
    "parse",
    "MAX_PATTERN_LENGTH",
    # Caches
    "PatternCache",
    "TemplateCache",
    "default_cache",
    "default_template_cache",
    "CACHE_LIMIT",
    # Routes
    "Location",
    "Route",
    "Redirect",
    "Entry",
    "switch",
    "RouteTable",
    "load_route_table",
    "load_route_table_yaml",
    # Config types
    "RouteConfig",
    "RedirectConfig",
    "LocationConfig",
    "RouteTableConfig",
    "parse_route_config",
    "MAX_ROUTES",
    # Errors
    "RoutePathError",
    "InvalidPatternError",
    "PatternTooLongError",
    "ParameterError",
    "MissingParameterError",
    "InvalidParameterError",
    "ConfigParseError",
]
