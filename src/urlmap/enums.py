from enum import Enum


class DuplicatePolicy(str, Enum):
    reject = "reject"
    first = "first"


class TableFormat(str, Enum):
    json = "json"
    yaml = "yaml"
    js = "js"


class ListFormat(str, Enum):
    text = "text"
    json = "json"
    yaml = "yaml"
    js = "js"
