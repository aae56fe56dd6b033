from dataclasses import dataclass


@dataclass
class EditRejected(Exception):
    message: str


@dataclass
class SettingsError(Exception):
    message: str
