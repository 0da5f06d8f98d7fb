import unittest
from unittest.mock import patch

from google_auth_oauthlib.flow import Flow

from classdrive.auth import AuthInfo, OAuthClient
from classdrive.config import Settings
from classdrive.errors import (
    AuthExchangeError,
    InvalidArgumentError,
    PermissionGrantError,
    RemoteGetError,
    RemoteListError,
    RemoteUploadError,
    TokenRefreshError,
)
from classdrive.manager import DriveSyncManager
from classdrive.models import FileBlob, SessionContext, TokenPair

REDIRECT_URI = "http://localhost:3000/api/auth/callback/google"

LISTED = [
    {"id": "F1", "name": "Chapter 1.pdf", "mimeType": "application/pdf", "size": "1536",
     "description": "Grade: 11"},
    {"id": "F2", "name": "Scores", "mimeType": "application/vnd.google-apps.spreadsheet"},
]


class FakeController:
    def __init__(self) -> None:
        self.calls = []
        self.list_error = None
        self.get_error = None
        self.upload_error = None
        self.grant_error = None
        self.delete_error = None
        self.records = {r["id"]: r for r in LISTED}

    def list_files(self, search_term=None):
        self.calls.append(("list_files", search_term))
        if self.list_error:
            raise self.list_error
        return list(LISTED)

    def get_file(self, file_id):
        self.calls.append(("get_file", file_id))
        if self.get_error:
            raise self.get_error
        return self.records.get(file_id)

    def upload_file(self, blob, class_tag=None):
        self.calls.append(("upload_file", blob.name, class_tag))
        if self.upload_error:
            raise self.upload_error
        description = f"Grade: {class_tag}" if class_tag else None
        return {"id": "NEW", "name": blob.name, "mimeType": blob.mime_type,
                "size": str(len(blob.data)), "description": description}

    def grant_public_read(self, file_id):
        self.calls.append(("grant_public_read", file_id))
        if self.grant_error:
            raise self.grant_error

    def delete_file(self, file_id):
        self.calls.append(("delete_file", file_id))
        if self.delete_error:
            raise self.delete_error


class FakeOAuth:
    def __init__(self) -> None:
        self.exchange_error = None
        self.refresh_error = None
        self.refreshed_with = []

    def authorization_url(self, scopes, redirect_uri):
        return f"https://accounts.example/auth?redirect_uri={redirect_uri}"

    def exchange_code(self, code, redirect_uri):
        if self.exchange_error:
            raise self.exchange_error
        return TokenPair(access_token=f"access-{code}", refresh_token="refresh-1")

    def refresh(self, refresh_token):
        self.refreshed_with.append(refresh_token)
        if self.refresh_error:
            raise self.refresh_error
        return TokenPair(access_token="access-refreshed")


def _manager(on_grant_failure="rollback"):
    controller = FakeController()
    oauth = FakeOAuth()
    tokens_seen = []

    def factory(token):
        tokens_seen.append(token)
        return controller

    manager = DriveSyncManager.from_components(
        oauth,  # type: ignore[arg-type]
        factory,  # type: ignore[arg-type]
        redirect_uri=REDIRECT_URI,
        on_grant_failure=on_grant_failure,
    )
    return manager, controller, oauth, tokens_seen


def _signed_in() -> SessionContext:
    return SessionContext(access_token="access-1", refresh_token="refresh-1")


def _blob() -> FileBlob:
    return FileBlob(name="worksheet.pdf", mime_type="application/pdf", data=b"%PDF")


class TestAuthorization(unittest.TestCase):
    def test_authorization_url_uses_configured_redirect(self) -> None:
        manager, _, _, _ = _manager()
        self.assertIn(REDIRECT_URI, manager.get_authorization_url())

    def test_complete_authorization_saves_tokens(self) -> None:
        manager, _, _, _ = _manager()
        session = SessionContext()

        result = manager.complete_authorization(session, "abc")

        self.assertTrue(result.success)
        self.assertIsNone(result.error)
        self.assertEqual(session.access_token, "access-abc")
        self.assertEqual(session.refresh_token, "refresh-1")
        self.assertTrue(session.dirty)

    def test_complete_authorization_failure_is_a_result(self) -> None:
        manager, _, oauth, _ = _manager()
        oauth.exchange_error = AuthExchangeError("invalid_grant")
        session = SessionContext()

        result = manager.complete_authorization(session, "abc")

        self.assertFalse(result.success)
        self.assertEqual(result.error_type, "AuthExchangeError")
        self.assertIsNone(session.access_token)

    def test_redirect_uri_mismatch_between_steps(self) -> None:
        oauth = OAuthClient(AuthInfo(kind="oauth", data={"client_id": "c", "client_secret": "s"}))
        authorize = DriveSyncManager.from_components(
            oauth, lambda t: FakeController(), redirect_uri=REDIRECT_URI  # type: ignore[arg-type]
        )
        callback = DriveSyncManager.from_components(
            oauth, lambda t: FakeController(), redirect_uri="http://127.0.0.1:3000/api/auth/callback/google"  # type: ignore[arg-type]
        )

        authorize.get_authorization_url()
        session = SessionContext()
        with patch.object(Flow, "fetch_token") as fetch:
            result = callback.complete_authorization(session, "abc")

        fetch.assert_not_called()
        self.assertFalse(result.success)
        self.assertEqual(result.error_type, "AuthExchangeError")
        self.assertIsNone(session.access_token)

    def test_refresh_access_is_explicit(self) -> None:
        manager, _, oauth, _ = _manager()
        session = _signed_in()

        result = manager.refresh_access(session)

        self.assertTrue(result.success)
        self.assertEqual(oauth.refreshed_with, ["refresh-1"])
        self.assertEqual(session.access_token, "access-refreshed")
        self.assertEqual(session.refresh_token, "refresh-1")

    def test_refresh_without_refresh_token(self) -> None:
        manager, _, oauth, _ = _manager()
        result = manager.refresh_access(SessionContext(access_token="a"))
        self.assertFalse(result.success)
        self.assertEqual(oauth.refreshed_with, [])

    def test_refresh_failure(self) -> None:
        manager, _, oauth, _ = _manager()
        oauth.refresh_error = TokenRefreshError("revoked")
        result = manager.refresh_access(_signed_in())
        self.assertFalse(result.success)
        self.assertEqual(result.error_type, "TokenRefreshError")

    def test_list_does_not_refresh_implicitly(self) -> None:
        manager, controller, oauth, _ = _manager()
        result = manager.list_files(SessionContext(refresh_token="refresh-1"))
        self.assertFalse(result.authenticated)
        self.assertEqual(oauth.refreshed_with, [])
        self.assertEqual(controller.calls, [])

    def test_disconnect_is_idempotent(self) -> None:
        manager, _, _, _ = _manager()
        session = _signed_in()

        first = manager.disconnect(session)
        second = manager.disconnect(session)

        self.assertTrue(first.success)
        self.assertTrue(second.success)
        self.assertIsNone(manager.token_store.read(session))
        self.assertIsNone(manager.token_store.read_refresh(session))


class TestListAndGet(unittest.TestCase):
    def test_list_without_token_skips_adapter(self) -> None:
        manager, controller, _, tokens_seen = _manager()

        result = manager.list_files(SessionContext())

        self.assertEqual(result.files, [])
        self.assertFalse(result.authenticated)
        self.assertEqual(result.status, "unauthenticated")
        self.assertEqual(controller.calls, [])
        self.assertEqual(tokens_seen, [])

    def test_list_normalizes_as_listed(self) -> None:
        manager, controller, _, tokens_seen = _manager()

        result = manager.list_files(_signed_in(), "chapter")

        self.assertTrue(result.authenticated)
        self.assertEqual(result.status, "ok")
        self.assertEqual(tokens_seen, ["access-1"])
        self.assertEqual(controller.calls, [("list_files", "chapter")])
        self.assertEqual([f.id for f in result.files], ["F1", "F2"])
        self.assertTrue(all(f.uploaded_by == "Google Drive" for f in result.files))
        self.assertEqual(result.files[0].class_tag, "Grade 11")
        self.assertEqual(result.files[0].size_label, "2 KB")
        self.assertEqual(result.files[1].category, "Spreadsheet")

    def test_list_with_malformed_records_still_succeeds(self) -> None:
        manager, controller, _, _ = _manager()
        controller.list_files = lambda search_term=None: [  # type: ignore[method-assign]
            {"id": "B1", "size": "²"},
            {"id": "B2", "size": "1" + "0" * 400},
            {"id": "B3", "createdTime": "0001-01-01T00:00:00+01:00"},
        ]

        result = manager.list_files(_signed_in())

        self.assertEqual(result.status, "ok")
        self.assertEqual([f.id for f in result.files], ["B1", "B2", "B3"])
        self.assertEqual(result.files[0].size_label, "Unknown size")
        self.assertEqual(result.files[2].created_label, "Unknown date")

    def test_list_auth_failure_is_unauthenticated(self) -> None:
        manager, controller, _, _ = _manager()
        controller.list_error = RemoteListError("x", details={"kind": "auth"})

        result = manager.list_files(_signed_in())

        self.assertEqual(result.files, [])
        self.assertFalse(result.authenticated)
        self.assertEqual(result.status, "unauthenticated")

    def test_list_transient_failure_is_unavailable(self) -> None:
        manager, controller, _, _ = _manager()
        controller.list_error = RemoteListError("x", details={"kind": "network"})

        result = manager.list_files(_signed_in())

        self.assertEqual(result.files, [])
        self.assertFalse(result.authenticated)
        self.assertEqual(result.status, "unavailable")

    def test_controller_construction_failure_is_contained(self) -> None:
        def factory(token):
            raise InvalidArgumentError("bad token")

        manager = DriveSyncManager.from_components(
            FakeOAuth(), factory, redirect_uri=REDIRECT_URI  # type: ignore[arg-type]
        )
        result = manager.list_files(_signed_in())
        self.assertEqual(result.status, "unavailable")

    def test_get_file(self) -> None:
        manager, _, _, _ = _manager()
        result = manager.get_file(_signed_in(), "F1")
        self.assertEqual(result.status, "ok")
        self.assertEqual(result.file.name, "Chapter 1.pdf")
        self.assertEqual(result.file.uploaded_by, "Google Drive")

    def test_get_missing_file(self) -> None:
        manager, _, _, _ = _manager()
        result = manager.get_file(_signed_in(), "nope")
        self.assertIsNone(result.file)
        self.assertTrue(result.authenticated)
        self.assertEqual(result.status, "not_found")

    def test_get_file_failure(self) -> None:
        manager, controller, _, _ = _manager()
        controller.get_error = RemoteGetError("x", details={"kind": "auth"})
        result = manager.get_file(_signed_in(), "F1")
        self.assertIsNone(result.file)
        self.assertFalse(result.authenticated)
        self.assertEqual(result.status, "unauthenticated")

    def test_get_without_token(self) -> None:
        manager, controller, _, _ = _manager()
        result = manager.get_file(SessionContext(), "F1")
        self.assertEqual(result.status, "unauthenticated")
        self.assertEqual(controller.calls, [])


class TestUpload(unittest.TestCase):
    def test_upload_success_is_shared_and_by_you(self) -> None:
        manager, controller, _, _ = _manager()

        result = manager.upload_file(_signed_in(), _blob(), "10")

        self.assertTrue(result.success)
        self.assertEqual(result.status, "uploaded")
        self.assertTrue(result.shared)
        self.assertEqual(result.file.uploaded_by, "You")
        self.assertEqual(result.file.class_tag, "Grade 10")
        self.assertEqual(
            controller.calls,
            [("upload_file", "worksheet.pdf", "10"), ("grant_public_read", "NEW")],
        )

    def test_upload_without_token(self) -> None:
        manager, controller, _, _ = _manager()
        result = manager.upload_file(SessionContext(), _blob())
        self.assertFalse(result.success)
        self.assertEqual(result.status, "unauthenticated")
        self.assertEqual(controller.calls, [])

    def test_upload_without_file(self) -> None:
        manager, controller, _, _ = _manager()
        result = manager.upload_file(_signed_in(), None)
        self.assertFalse(result.success)
        self.assertEqual(result.status, "invalid")
        self.assertEqual(result.error, "No file provided")
        self.assertEqual(controller.calls, [])

    def test_upload_failure_keeps_provider_message_out_of_error(self) -> None:
        manager, controller, _, _ = _manager()
        controller.upload_error = RemoteUploadError(
            "x", details={"kind": "quota", "provider_message": "Storage quota exceeded"}
        )

        result = manager.upload_file(_signed_in(), _blob())

        self.assertFalse(result.success)
        self.assertEqual(result.status, "failed")
        self.assertEqual(result.error, "Failed to upload file")
        self.assertEqual(result.detail, "Storage quota exceeded")

    def test_grant_failure_rolls_back_by_default(self) -> None:
        manager, controller, _, _ = _manager()
        controller.grant_error = PermissionGrantError("x", details={"kind": "permission"})

        result = manager.upload_file(_signed_in(), _blob())

        self.assertFalse(result.success)
        self.assertEqual(result.status, "rolled_back")
        self.assertIsNone(result.file)
        self.assertIn(("delete_file", "NEW"), controller.calls)

    def test_grant_and_rollback_failure_reports_private_file(self) -> None:
        manager, controller, _, _ = _manager()
        controller.grant_error = PermissionGrantError("x")
        controller.delete_error = RemoteUploadError("y")

        result = manager.upload_file(_signed_in(), _blob())

        self.assertFalse(result.success)
        self.assertEqual(result.status, "uploaded_private")
        self.assertFalse(result.shared)
        self.assertEqual(result.file.id, "NEW")

    def test_grant_failure_keep_private_policy(self) -> None:
        manager, controller, _, _ = _manager(on_grant_failure="keep_private")
        controller.grant_error = PermissionGrantError("x")

        result = manager.upload_file(_signed_in(), _blob())

        self.assertTrue(result.success)
        self.assertEqual(result.status, "uploaded_private")
        self.assertFalse(result.shared)
        self.assertEqual(result.file.uploaded_by, "You")
        self.assertNotIn(("delete_file", "NEW"), controller.calls)


class TestFromSettings(unittest.TestCase):
    def test_requires_client_credentials(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            DriveSyncManager.from_settings(Settings(google_client_id=None, google_client_secret=None))

    def test_redirect_uri_is_base_plus_suffix(self) -> None:
        settings = Settings(
            google_client_id="cid",
            google_client_secret="secret",
            redirect_base_url="https://portal.example/api/auth/callback",
        )
        manager = DriveSyncManager.from_settings(settings)
        self.assertEqual(manager.redirect_uri, "https://portal.example/api/auth/callback/google")


if __name__ == "__main__":
    unittest.main()
