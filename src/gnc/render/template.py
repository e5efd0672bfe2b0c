from __future__ import annotations

import string
from typing import Iterable, Mapping

from ..errors import ConfigError


_FORMATTER = string.Formatter()


class FormatTemplate:
    """
    命名占位符模板：`{name}` 会被替换为 values[name]。

    所有校验都在构造时完成（未知占位符、位置参数、属性/下标访问、转换符、
    不成对的花括号、不适用于字符串的格式说明），渲染阶段不会再因格式串失败。
    """

    def __init__(self, fmt: str, *, allowed: Iterable[str]) -> None:
        self._fmt = fmt
        self._allowed = tuple(allowed)
        self._placeholders = self._validate()

    @property
    def placeholders(self) -> tuple[str, ...]:
        return self._placeholders

    def _validate(self) -> tuple[str, ...]:
        try:
            parsed = list(_FORMATTER.parse(self._fmt))
        except ValueError as e:
            raise ConfigError(f"invalid format {self._fmt!r}: {e}") from e

        names: list[str] = []
        for _literal, field_name, format_spec, conversion in parsed:
            if field_name is None:
                continue
            if not field_name or field_name.isdigit():
                raise ConfigError(f"invalid format {self._fmt!r}: positional placeholders are not supported")
            if conversion is not None:
                raise ConfigError(f"invalid format {self._fmt!r}: conversion '!{conversion}' is not supported")
            if "{" in (format_spec or ""):
                raise ConfigError(f"invalid format {self._fmt!r}: nested placeholders are not supported")
            if field_name not in self._allowed:
                raise ConfigError(
                    f"invalid format {self._fmt!r}: unknown placeholder {{{field_name}}}, "
                    f"expected one of {', '.join(self._allowed)}"
                )
            if field_name not in names:
                names.append(field_name)

        try:
            self._fmt.format_map({name: "0" for name in self._allowed})
        except (ValueError, TypeError) as e:
            raise ConfigError(f"invalid format {self._fmt!r}: {e}") from e
        return tuple(names)

    def render(self, values: Mapping[str, str]) -> str:
        return self._fmt.format_map(values)
