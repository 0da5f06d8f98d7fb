import unittest

import classdrive


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(classdrive, "DriveSyncManager"))
        self.assertTrue(hasattr(classdrive, "DriveController"))
        self.assertTrue(hasattr(classdrive, "TokenStore"))
        self.assertTrue(hasattr(classdrive, "normalize"))

        self.assertTrue(hasattr(classdrive, "AuthInfo"))
        self.assertTrue(hasattr(classdrive, "OAuthClient"))

        self.assertTrue(hasattr(classdrive, "NormalizedFile"))
        self.assertTrue(hasattr(classdrive, "SessionContext"))
        self.assertTrue(hasattr(classdrive, "UploadResult"))

        self.assertTrue(hasattr(classdrive, "ClassDriveError"))
        self.assertTrue(hasattr(classdrive, "AuthExchangeError"))
        self.assertTrue(hasattr(classdrive, "PermissionGrantError"))

    def test___all___is_defined(self) -> None:
        self.assertIn("DriveSyncManager", classdrive.__all__)
        self.assertIn("ClassDriveError", classdrive.__all__)
        for name in classdrive.__all__:
            self.assertTrue(hasattr(classdrive, name), name)


if __name__ == "__main__":
    unittest.main()
