from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping

from .oui import RegistryPaths

# Debian's install path for macchanger's copy of the list
SYSTEM_OUI_LIST = Path("/usr/share/macchanger/OUI.list")
LOCAL_OUI_LIST = Path("./OUI.list")
SURVEY_FILE = Path("./mac_address_survey.output")

REGISTRY_KEYWORD = "ouilist"


@dataclass(frozen=True)
class Settings:
    survey: Path = SURVEY_FILE
    system_oui_list: Path = SYSTEM_OUI_LIST
    oui_list: Path = LOCAL_OUI_LIST
    backend: str = "macchanger"
    keyword: str = REGISTRY_KEYWORD

    @property
    def registry_paths(self) -> RegistryPaths:
        return RegistryPaths(primary=self.system_oui_list, fallback=self.oui_list)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        s = cls()
        if env.get("MAC_CHOICE_SURVEY"):
            s = replace(s, survey=Path(env["MAC_CHOICE_SURVEY"]))
        if env.get("MAC_CHOICE_SYSTEM_OUI_LIST"):
            s = replace(s, system_oui_list=Path(env["MAC_CHOICE_SYSTEM_OUI_LIST"]))
        if env.get("MAC_CHOICE_OUI_LIST"):
            s = replace(s, oui_list=Path(env["MAC_CHOICE_OUI_LIST"]))
        if env.get("MAC_CHOICE_BACKEND"):
            s = replace(s, backend=env["MAC_CHOICE_BACKEND"])
        return s

    def with_overrides(
        self,
        survey: str | None = None,
        system_oui_list: str | None = None,
        oui_list: str | None = None,
        backend: str | None = None,
    ) -> Settings:
        s = self
        if survey:
            s = replace(s, survey=Path(survey))
        if system_oui_list:
            s = replace(s, system_oui_list=Path(system_oui_list))
        if oui_list:
            s = replace(s, oui_list=Path(oui_list))
        if backend:
            s = replace(s, backend=backend)
        return s
