from __future__ import annotations

from dataclasses import dataclass
from typing import Any


# Nerd Font / Font Awesome 码位；未知图标不加前缀
ICONS: dict[str, str] = {
    "github": "\uf09b",
}


@dataclass(slots=True)
class TextWidget:
    """
    状态栏文本组件：图标 + 文本，每轮轮询刷新一次。

    to_json_dict() 输出 i3bar 协议中的单个 block。
    """

    icon: str
    text: str
    name: str = "github"
    instance: str = ""

    def set_text(self, text: str) -> None:
        self.text = text

    def full_text(self) -> str:
        glyph = ICONS.get(self.icon)
        if not glyph:
            return self.text
        return f" {glyph} {self.text} "

    def to_json_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "instance": self.instance,
            "full_text": self.full_text(),
        }
