"""Built-in detection rules and inference tables."""

from typing import List, Tuple

from .rules import DetectionRule, api_rule

BASE_REFERENCES: Tuple[str, ...] = ("builtins", "typing", "math")
"""Modules every snippet is compiled against, regardless of detection."""


BUILTIN_RULES: List[DetectionRule] = [
    # Containers and functional helpers
    api_rule(
        "collections",
        names=["defaultdict", "Counter", "OrderedDict", "deque", "namedtuple", "ChainMap"],
        substrings=["collections."],
    ),
    api_rule(
        "itertools",
        names=["groupby", "islice", "permutations", "combinations", "zip_longest", "accumulate"],
        substrings=["itertools."],
    ),
    api_rule(
        "functools",
        names=["reduce", "lru_cache", "partial", "cached_property", "total_ordering"],
        substrings=["functools."],
    ),
    # Serialization
    api_rule(
        "json",
        names=["JSONDecodeError", "JSONEncoder", "JSONDecoder"],
        substrings=["json.dumps", "json.loads"],
    ),
    api_rule("base64", names=["b64encode", "b64decode", "urlsafe_b64encode", "b32encode"]),
    api_rule("hashlib", names=["sha256", "sha1", "md5", "blake2b", "pbkdf2_hmac"]),
    # Text
    api_rule(
        "re",
        names=["fullmatch", "finditer", "findall", "IGNORECASE", "MULTILINE"],
        patterns=[r"\bre\.\w+"],
    ),
    api_rule(
        "string",
        names=["ascii_letters", "ascii_lowercase", "ascii_uppercase", "punctuation", "hexdigits"],
    ),
    api_rule("textwrap", names=["dedent", "shorten"], substrings=["textwrap."]),
    # Numbers
    api_rule("statistics", names=["median", "stdev", "pstdev", "variance", "quantiles"]),
    api_rule("decimal", names=["Decimal", "getcontext", "localcontext", "ROUND_HALF_UP"]),
    api_rule("fractions", names=["Fraction"]),
    api_rule("random", names=["randint", "randrange", "shuffle", "uniform"], substrings=["random."]),
    # Network and storage
    api_rule(
        "urllib.request",
        names=["urlopen", "HTTPError", "URLError"],
        substrings=["urllib.request"],
        namespace="urllib",
    ),
    api_rule(
        "http.client",
        names=["HTTPConnection", "HTTPSConnection", "HTTPResponse"],
        namespace="http",
    ),
    api_rule("sqlite3", names=["OperationalError", "IntegrityError"], substrings=["sqlite3"]),
    api_rule("pathlib", names=["PurePath", "PosixPath", "WindowsPath"], substrings=["Path("]),
    # Diagnostics
    api_rule(
        "logging",
        names=["getLogger", "LogRecord", "StreamHandler", "basicConfig"],
        substrings=["logging."],
    ),
    # Third-party libraries
    api_rule(
        "pydantic",
        names=["BaseModel", "ValidationError", "field_validator", "model_validator"],
        substrings=["pydantic"],
    ),
    api_rule("numpy", names=["ndarray"], substrings=["numpy"], patterns=[r"\bnp\.\w+"]),
    api_rule("yaml", names=["safe_load", "safe_dump"], substrings=["yaml."]),
]
"""Rules every registry created with :meth:`RuleRegistry.with_builtin_rules` starts with."""


TYPE_INFERENCE: List[Tuple[str, str]] = [
    (r"\b(?:datetime|timedelta|timezone|tzinfo)\b", "datetime"),
    (r"\b(?:UUID|uuid1|uuid4|uuid5)\b", "uuid"),
    (r"\b(?:perf_counter|monotonic|process_time)\b", "time"),
    (r"\b(?:BytesIO|StringIO|TextIOWrapper|BufferedReader)\b", "io"),
    (r"\b(?:Pattern|Match)\b", "re"),
]
"""Characteristic type names mapped to the module that defines them. Matched
case-sensitively and independent of the rule registry."""


USED_TYPE_FAMILIES: List[Tuple[str, str]] = [
    (r"\b(?:defaultdict|Counter|OrderedDict|deque|ChainMap)\b", "collections"),
    (r"\b(?:Path|PurePath|PosixPath)\b", "pathlib"),
    (r"\b(?:StringIO|BytesIO|TextIOWrapper)\b", "io"),
    (r"\b(?:urlopen|HTTPConnection|HTTPSConnection)\b", "urllib.request"),
    (r"\b(?:JSONDecodeError|JSONEncoder|JSONDecoder)\b", "json"),
    (r"\b(?:reduce|partial|lru_cache)\b", "functools"),
]
"""Type families used to report the namespaces a snippet touches."""
