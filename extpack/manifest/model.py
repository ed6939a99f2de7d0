# extpack/manifest/model.py
from __future__ import annotations
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, SerializerFunctionWrapHandler, field_serializer, field_validator, model_validator

from .constants import MANIFEST_VERSION

__all__ = [
    "GeckoSettings",
    "BrowserSpecificSettings",
    "ServiceWorkerBackground",
    "ScriptsBackground",
    "Background",
    "Action",
    "OptionsUi",
    "SidePanel",
    "Command",
    "ContentScript",
    "WebAccessibleResource",
    "ContentSecurityPolicy",
    "OAuth2",
    "ManifestDocument",
]

ExecutionModel = Literal["module", "classic"]



class _Frozen(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    def __deepcopy__(self, memo: dict[int, Any] | None = None) -> _Frozen:
        # Field values are immutable all the way down; a shallow copy is already independent
        return self.__copy__()



def _freezeMapping(value: Any) -> Any:
    if isinstance(value, Mapping) and not isinstance(value, MappingProxyType):
        return MappingProxyType(dict(value))
    return value



def _thawMapping(value: Any, handler: SerializerFunctionWrapHandler) -> Any:
    return handler(dict(value) if isinstance(value, Mapping) else value)



def _rejectDuplicates(values: tuple[str, ...] | None, what: str) -> tuple[str, ...] | None:
    if values is None:
        return None
    seen: set[str] = set()
    dupes: list[str] = []
    for value in values:
        if value in seen and value not in dupes:
            dupes.append(value)
        seen.add(value)
    if dupes:
        raise ValueError(f"Duplicate {what}: {', '.join(dupes)}")
    return values



class GeckoSettings(_Frozen):
    """Firefox identity. Required by AMO and by Gecko's loader for MV3 extensions."""
    id: str
    strict_min_version: str | None = None



class BrowserSpecificSettings(_Frozen):
    gecko: GeckoSettings



class ServiceWorkerBackground(_Frozen):
    """On-demand worker shape (Chromium)."""
    service_worker: str
    type: ExecutionModel | None = None



class ScriptsBackground(_Frozen):
    """Persistent script-list shape (Gecko)."""
    scripts: tuple[str, ...]
    type: ExecutionModel | None = None



Background = ServiceWorkerBackground | ScriptsBackground



class Action(_Frozen):
    default_popup: str | None = None
    default_icon: str | dict[str, str] | None = None
    default_title: str | None = None

    @field_validator("default_icon")
    @classmethod
    def _freezeIcon(cls, value: str | dict[str, str] | None) -> Any:
        return _freezeMapping(value)

    @field_serializer("default_icon", mode="wrap")
    def _dumpIcon(self, value: Any, handler: SerializerFunctionWrapHandler) -> Any:
        return _thawMapping(value, handler)



class OptionsUi(_Frozen):
    page: str
    browser_style: bool | None = None
    open_in_tab: bool | None = None



class SidePanel(_Frozen):
    default_path: str



class Command(_Frozen):
    # Platform name ("default", "mac", "windows", "chromeos", "linux") -> key combo
    suggested_key: dict[str, str] | None = None
    description: str | None = None

    @field_validator("suggested_key")
    @classmethod
    def _freezeKeys(cls, value: dict[str, str] | None) -> Any:
        return _freezeMapping(value)

    @field_serializer("suggested_key", mode="wrap")
    def _dumpKeys(self, value: Any, handler: SerializerFunctionWrapHandler) -> Any:
        return _thawMapping(value, handler)



class ContentScript(_Frozen):
    """One injection rule. Rules are applied in declaration order."""
    matches: tuple[str, ...]
    js: tuple[str, ...] | None = None
    css: tuple[str, ...] | None = None
    run_at: Literal["document_start", "document_end", "document_idle"] | None = None
    all_frames: bool | None = None

    @model_validator(mode="after")
    def _injectsSomething(self) -> ContentScript:
        if not self.js and not self.css:
            raise ValueError("content script rule must inject at least one js or css resource")
        return self



class WebAccessibleResource(_Frozen):
    resources: tuple[str, ...]
    matches: tuple[str, ...]



class ContentSecurityPolicy(_Frozen):
    extension_pages: str | None = None
    sandbox: str | None = None



class OAuth2(_Frozen):
    client_id: str
    scopes: tuple[str, ...] = ()



class ManifestDocument(_Frozen):
    """
    Engine-neutral extension manifest.

    Field order is the serialized key order. Optional fields left as None are
    omitted from the serialized document. Mapping fields (icons, commands,
    key bindings) are held as read-only views and dump back to plain dicts.
    """
    manifest_version: int = MANIFEST_VERSION
    default_locale: str | None = None
    name: str
    key: str | None = None
    browser_specific_settings: BrowserSpecificSettings | None = None
    version: str
    description: str | None = None
    host_permissions: tuple[str, ...] | None = None
    permissions: tuple[str, ...] | None = None
    options_page: str | None = None
    options_ui: OptionsUi | None = None
    background: Background | None = None
    action: Action | None = None
    icons: dict[str, str] | None = None
    commands: dict[str, Command] | None = None
    content_scripts: tuple[ContentScript, ...] | None = None
    devtools_page: str | None = None
    web_accessible_resources: tuple[WebAccessibleResource, ...] | None = None
    side_panel: SidePanel | None = None
    oauth2: OAuth2 | None = None
    content_security_policy: ContentSecurityPolicy | None = None

    @field_validator("version")
    @classmethod
    def _versionNotBlank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("version must be a non-empty string")
        return value

    @field_validator("permissions")
    @classmethod
    def _uniquePermissions(cls, value: tuple[str, ...] | None) -> tuple[str, ...] | None:
        return _rejectDuplicates(value, "permissions")

    @field_validator("host_permissions")
    @classmethod
    def _uniqueHostPermissions(cls, value: tuple[str, ...] | None) -> tuple[str, ...] | None:
        return _rejectDuplicates(value, "host permissions")

    @field_validator("icons", "commands")
    @classmethod
    def _freezeMappings(cls, value: dict[str, Any] | None) -> Any:
        return _freezeMapping(value)

    @field_serializer("icons", "commands", mode="wrap")
    def _dumpMappings(self, value: Any, handler: SerializerFunctionWrapHandler) -> Any:
        return _thawMapping(value, handler)

    @model_validator(mode="after")
    def _singleOptionsSurface(self) -> ManifestDocument:
        if self.options_page is not None and self.options_ui is not None:
            raise ValueError("options_page and options_ui are mutually exclusive")
        return self

    # ----- Convenience -----

    def hasPermission(self, permission: str) -> bool:
        return permission in (self.permissions or ())
