"""Error taxonomy shared by the store, the services and the HTTP layer."""

from __future__ import annotations


class RegionSiteError(Exception):
    status_code = 500
    default_message = "Unexpected server error."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RegionSiteError):
    status_code = 400
    default_message = "Invalid data format."


class Unauthorized(RegionSiteError):
    status_code = 401
    default_message = "Access Denied. Invalid password."


class Forbidden(RegionSiteError):
    status_code = 403
    default_message = "Access Denied. Invalid password."


class NotFoundError(RegionSiteError):
    status_code = 404
    default_message = "Record not found."


class DuplicateError(RegionSiteError):
    status_code = 409
    default_message = "A record with this key already exists."


class ConfigUnavailable(RegionSiteError):
    status_code = 500
    default_message = "Server configuration error."


class StoreUnavailable(RegionSiteError):
    status_code = 500
    default_message = "The data store is unavailable."
