"""Unit tests for the filesystem source.

Tests FileSystemSource and LocalFileNode against a temporary directory.
"""

import os
import shutil
import tempfile
import unittest
from pathlib import Path

from docindexlib.adapters.filesystem import FileSystemSource, LocalFileNode
from docindexlib.core.collector import EntryCollector
from docindexlib.core.node import NodeKind
from docindexlib.errors import TraversalError


class TestLocalFileNode(unittest.TestCase):
    """Test LocalFileNode functionality."""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())
        self.test_file = self.test_dir / "notes.txt"
        self.test_file.write_text("test content")

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_kind_detection(self):
        self.assertEqual(LocalFileNode(self.test_dir).kind, NodeKind.FOLDER)
        self.assertEqual(LocalFileNode(self.test_file).kind, NodeKind.FILE)

    def test_identifier_is_absolute(self):
        identifier = LocalFileNode(self.test_file).identifier()
        self.assertTrue(os.path.isabs(identifier))
        self.assertEqual(identifier, str(self.test_file.absolute()))

    def test_url_is_file_uri(self):
        node = LocalFileNode(self.test_file)
        self.assertTrue(node.url().startswith("file://"))
        self.assertTrue(node.url().endswith("/notes.txt"))

    def test_mime_type(self):
        self.assertEqual(LocalFileNode(self.test_file).mime_type(), "text/plain")
        self.assertIsNone(LocalFileNode(self.test_dir).mime_type())
        unknown = self.test_dir / "blob.zzzunknown"
        unknown.write_bytes(b"\0")
        self.assertEqual(LocalFileNode(unknown).mime_type(), "application/octet-stream")

    def test_equality_by_path(self):
        self.assertEqual(LocalFileNode(self.test_file), LocalFileNode(str(self.test_file)))
        self.assertEqual(len({LocalFileNode(self.test_file), LocalFileNode(self.test_file)}), 1)


class TestFileSystemSource(unittest.TestCase):
    """Test FileSystemSource enumeration and resolution."""

    def setUp(self):
        # root/
        # ├── alpha/
        # │   └── inner.md
        # ├── beta/
        # ├── .hidden/
        # ├── data.csv
        # └── .env
        self.root = Path(tempfile.mkdtemp(prefix="docindex_"))
        (self.root / "alpha").mkdir()
        (self.root / "alpha" / "inner.md").write_text("# inner")
        (self.root / "beta").mkdir()
        (self.root / ".hidden").mkdir()
        (self.root / "data.csv").write_text("a,b")
        (self.root / ".env").write_text("X=1")
        self.source = FileSystemSource()

    def tearDown(self):
        shutil.rmtree(self.root, ignore_errors=True)

    def names(self, nodes):
        return sorted(node.name() for node in nodes)

    def test_child_folders(self):
        folders = self.source.child_folders(LocalFileNode(self.root))
        self.assertEqual(self.names(folders), [".hidden", "alpha", "beta"])
        self.assertTrue(all(node.is_folder() for node in folders))

    def test_child_files(self):
        files = self.source.child_files(LocalFileNode(self.root))
        self.assertEqual(self.names(files), [".env", "data.csv"])
        self.assertTrue(all(node.is_file() for node in files))

    def test_hidden_entries_excluded(self):
        source = FileSystemSource(include_hidden=False)
        root = LocalFileNode(self.root)
        self.assertEqual(self.names(source.child_folders(root)), ["alpha", "beta"])
        self.assertEqual(self.names(source.child_files(root)), ["data.csv"])

    @unittest.skipIf(not hasattr(os, "symlink"), "symlinks not supported")
    def test_symlinks_skipped_by_default(self):
        try:
            (self.root / "link").symlink_to(self.root / "alpha", target_is_directory=True)
        except OSError:
            self.skipTest("cannot create symlinks here")
        root = LocalFileNode(self.root)
        self.assertNotIn("link", self.names(FileSystemSource().child_folders(root)))
        self.assertIn("link", self.names(FileSystemSource(follow_symlinks=True).child_folders(root)))

    def test_resolve_path(self):
        node = self.source.resolve(str(self.root))
        self.assertTrue(node.is_folder())
        self.assertEqual(node.identifier(), str(self.root.resolve()))

    def test_resolve_file_uri(self):
        node = self.source.resolve((self.root / "data.csv").resolve().as_uri())
        self.assertEqual(node.name(), "data.csv")
        self.assertTrue(node.is_file())

    def test_resolve_missing(self):
        with self.assertRaises(TraversalError):
            self.source.resolve(str(self.root / "missing"))

    def test_listing_a_removed_folder_raises(self):
        gone = LocalFileNode(self.root / "beta")
        (self.root / "beta").rmdir()
        with self.assertRaises(OSError):
            self.source.child_folders(gone)

    def test_collect(self):
        root = self.source.resolve(str(self.root))
        entries = EntryCollector(FileSystemSource(include_hidden=False)).collect(root, 5)
        top = self.root.resolve().name
        self.assertEqual(
            [entry.joined_path("/") for entry in entries],
            [top, f"{top}/alpha", f"{top}/alpha/inner.md", f"{top}/beta", f"{top}/data.csv"],
        )


if __name__ == "__main__":
    unittest.main()
