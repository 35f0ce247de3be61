"""Integration tests for file tree routes.

These tests verify the behavior of all tree API endpoints:
- GET /tree - Summary of the shared tree
- POST /tree/init, POST /tree/destroy - Lifecycle
- POST/DELETE /tree/dirs, POST/DELETE /tree/files - Insertion and removal
- GET/PUT /tree/files/contents - File contents
- GET /tree/contains, GET /tree/stat - Lookups
- GET /tree/render, GET /tree/validate - Rendering and validation
"""

import pytest

from tests.fixtures.tree import PROJECT_FILES, PROJECT_RENDERING


def populate(client):
    """Insert the project layout through the API."""
    for path, contents in PROJECT_FILES.items():
        body = {"path": path}
        if contents is not None:
            body["contents"] = contents.decode("utf-8")
        response = client.post("/tree/files", json=body)
        assert response.status_code == 200, response.json()


class TestLifecycle:
    """Tests for GET /tree, POST /tree/init and POST /tree/destroy."""

    def test_summary(self, client_with_tree):
        """Test the summary of an empty, initialized tree."""
        client, _ = client_with_tree

        response = client.get("/tree")

        assert response.status_code == 200
        assert response.json() == {"initialized": True, "count": 0, "summary": "empty"}

    def test_init_twice(self, client_with_tree):
        """Test that initializing an initialized tree is a conflict."""
        client, _ = client_with_tree

        response = client.post("/tree/init")

        assert response.status_code == 409
        data = response.json()
        assert data["status"] == "already_initialized"
        assert data["error"] == "File Tree Operation Failed"

    def test_destroy_then_init(self, client_with_tree):
        """Test a full destroy/init cycle."""
        client, tree = client_with_tree
        client.post("/tree/dirs", json={"path": "/a/b"})

        response = client.post("/tree/destroy")
        assert response.status_code == 200
        assert response.json()["count"] == 0
        assert tree.initialized is False

        assert client.post("/tree/destroy").status_code == 409
        assert client.post("/tree/dirs", json={"path": "/a"}).json()["status"] == "uninitialized"

        response = client.post("/tree/init")
        assert response.status_code == 200
        assert response.json() == {"status": "success", "path": None, "count": 0}


class TestInsertAndRemove:
    """Tests for /tree/dirs and /tree/files."""

    def test_insert_dir(self, client_with_tree):
        """Test that inserting a deep directory reports the new count."""
        client, tree = client_with_tree

        response = client.post("/tree/dirs", json={"path": "/a/c"})

        assert response.status_code == 200
        assert response.json() == {"status": "success", "path": "/a/c", "count": 2}
        assert tree.contains_dir("/a") is True

    def test_insert_file(self, client_with_tree):
        """Test inserting a file with text contents."""
        client, tree = client_with_tree

        response = client.post("/tree/files", json={"path": "/a/f.txt", "contents": "hi"})

        assert response.status_code == 200
        assert tree.get_file_contents("/a/f.txt") == b"hi"

    def test_insert_file_without_contents(self, client_with_tree):
        """Test that omitted contents are stored as None."""
        client, tree = client_with_tree

        client.post("/tree/files", json={"path": "/a/f"})

        assert tree.get_file_contents("/a/f") is None

    def test_insert_duplicate(self, client_with_tree):
        """Test that a duplicate insert is a conflict naming the path."""
        client, _ = client_with_tree
        client.post("/tree/dirs", json={"path": "/a"})

        response = client.post("/tree/dirs", json={"path": "/a"})

        assert response.status_code == 409
        data = response.json()
        assert data["status"] == "already_in_tree"
        assert data["path"] == "/a"
        assert data["detail"] == "already in tree: /a"

    def test_insert_file_as_root(self, client_with_tree):
        """Test that a depth-1 file is a conflict."""
        client, _ = client_with_tree

        response = client.post("/tree/files", json={"path": "/x"})

        assert response.status_code == 409
        assert response.json()["status"] == "conflicting_path"

    def test_insert_bad_path(self, client_with_tree):
        """Test that a malformed path is unprocessable."""
        client, _ = client_with_tree

        response = client.post("/tree/dirs", json={"path": "/a//b"})

        assert response.status_code == 422
        assert response.json()["status"] == "bad_path"

    def test_insert_empty_path(self, client_with_tree):
        """Test that empty paths are rejected by request validation."""
        client, tree = client_with_tree

        response = client.post("/tree/dirs", json={"path": "  "})

        assert response.status_code == 422
        assert tree.count == 0

    def test_rm_dir(self, client_with_tree):
        """Test removing a directory subtree."""
        client, tree = client_with_tree
        populate(client)

        response = client.delete("/tree/dirs", params={"path": "/home/src"})

        assert response.status_code == 200
        assert response.json()["count"] == tree.count == 4

    def test_rm_file(self, client_with_tree):
        """Test removing a file."""
        client, tree = client_with_tree
        populate(client)

        response = client.delete("/tree/files", params={"path": "/home/readme.md"})

        assert response.status_code == 200
        assert tree.contains_file("/home/readme.md") is False

    @pytest.mark.parametrize(
        "endpoint,path,code,status",
        [
            ("/tree/dirs", "/home/missing", 404, "no_such_path"),
            ("/tree/dirs", "/home/readme.md", 409, "not_a_directory"),
            ("/tree/files", "/home/docs", 409, "not_a_file"),
            ("/tree/files", "/other/x", 409, "conflicting_path"),
            ("/tree/files", "", 422, "bad_path"),
        ],
    )
    def test_remove_errors(self, client_with_tree, endpoint, path, code, status):
        """Test that each removal failure maps to its HTTP status."""
        client, _ = client_with_tree
        populate(client)

        response = client.delete(endpoint, params={"path": path})

        assert response.status_code == code
        assert response.json()["status"] == status


class TestContents:
    """Tests for GET/PUT /tree/files/contents."""

    def test_get_contents(self, client_with_tree):
        """Test reading a file's contents."""
        client, _ = client_with_tree
        populate(client)

        response = client.get("/tree/files/contents", params={"path": "/home/src/main.py"})

        assert response.status_code == 200
        assert response.json() == {"path": "/home/src/main.py", "contents": "print('hi')\n"}

    def test_get_none_contents(self, client_with_tree):
        """Test that a file with no contents reports null."""
        client, _ = client_with_tree
        populate(client)

        response = client.get("/tree/files/contents", params={"path": "/home/src/pkg/empty"})

        assert response.status_code == 200
        assert response.json()["contents"] is None

    def test_get_contents_of_directory(self, client_with_tree):
        """Test that directories have no contents to read."""
        client, _ = client_with_tree
        populate(client)

        response = client.get("/tree/files/contents", params={"path": "/home/docs"})

        assert response.status_code == 404

    def test_replace_contents(self, client_with_tree):
        """Test that replacing contents returns the previous contents."""
        client, tree = client_with_tree
        populate(client)

        response = client.put(
            "/tree/files/contents", json={"path": "/home/readme.md", "contents": "# New"}
        )

        assert response.status_code == 200
        assert response.json() == {"path": "/home/readme.md", "old_contents": "# Project"}
        assert tree.get_file_contents("/home/readme.md") == b"# New"

    def test_replace_missing(self, client_with_tree):
        """Test that replacing a missing file is not found."""
        client, _ = client_with_tree

        response = client.put("/tree/files/contents", json={"path": "/a/f", "contents": "x"})

        assert response.status_code == 404
        assert response.json()["status"] == "no_such_path"


class TestLookups:
    """Tests for GET /tree/contains and GET /tree/stat."""

    def test_contains(self, client_with_tree):
        """Test containment for each kind."""
        client, _ = client_with_tree
        populate(client)

        dir_response = client.get("/tree/contains", params={"path": "/home/docs"})
        file_response = client.get(
            "/tree/contains", params={"path": "/home/docs", "kind": "file"}
        )

        assert dir_response.json() == {"path": "/home/docs", "kind": "dir", "contains": True}
        assert file_response.json()["contains"] is False

    def test_contains_never_errors(self, client_with_tree):
        """Test that lookup errors are answered with contains false."""
        client, _ = client_with_tree

        response = client.get("/tree/contains", params={"path": "a//b", "kind": "file"})

        assert response.status_code == 200
        assert response.json()["contains"] is False

    def test_contains_bad_kind(self, client_with_tree):
        """Test that an unknown kind is rejected."""
        client, _ = client_with_tree

        response = client.get("/tree/contains", params={"path": "/a", "kind": "link"})

        assert response.status_code == 422

    def test_stat(self, client_with_tree):
        """Test stat for a file and a directory."""
        client, _ = client_with_tree
        populate(client)

        file_stat = client.get("/tree/stat", params={"path": "/home/readme.md"}).json()
        dir_stat = client.get("/tree/stat", params={"path": "/home"}).json()

        assert file_stat == {"path": "/home/readme.md", "is_file": True, "size": 9}
        assert dir_stat == {"path": "/home", "is_file": False, "size": None}

    def test_stat_missing(self, client_with_tree):
        """Test that stat on a missing path is not found."""
        client, _ = client_with_tree
        populate(client)

        response = client.get("/tree/stat", params={"path": "/home/nope"})

        assert response.status_code == 404


class TestRenderAndValidate:
    """Tests for GET /tree/render and GET /tree/validate."""

    def test_render(self, client_with_tree):
        """Test rendering the project layout."""
        client, tree = client_with_tree
        populate(client)

        response = client.get("/tree/render")

        assert response.status_code == 200
        assert response.json() == {"rendering": PROJECT_RENDERING, "count": tree.count}

    def test_render_uninitialized(self, client_with_tree):
        """Test that an uninitialized tree renders as null."""
        client, tree = client_with_tree
        tree.destroy()

        response = client.get("/tree/render")

        assert response.json() == {"rendering": None, "count": 0}

    def test_validate(self, client_with_tree):
        """Test that a healthy tree validates."""
        client, _ = client_with_tree
        populate(client)

        response = client.get("/tree/validate")

        assert response.json() == {"valid": True, "errors": []}

    def test_validate_corrupted(self, client_with_tree):
        """Test that a corrupted tree reports its violation."""
        client, tree = client_with_tree
        populate(client)
        tree.count = 1

        data = client.get("/tree/validate").json()

        assert data["valid"] is False
        assert len(data["errors"]) == 1


class TestInvariantChecking:
    """Tests for running the checker after mutations."""

    def test_mutations_pass_checks(self, checking_client):
        """Test that ordinary mutations succeed with checking on."""
        client, tree = checking_client

        populate(client)
        response = client.delete("/tree/dirs", params={"path": "/home/docs"})

        assert response.status_code == 200
        assert tree.validate() == []

    def test_corruption_is_reported(self, checking_client):
        """Test that a mutation leaving the tree invalid is a server error."""
        client, tree = checking_client
        tree.insert_dir("/a")
        tree.count = 7

        response = client.post("/tree/dirs", json={"path": "/a/b"})

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Runtime Error"
        assert "failed invariant check" in data["detail"]


class TestRootEndpoints:
    """Tests for / and /health."""

    def test_health(self, test_client):
        """Test the health check."""
        assert test_client.get("/health").json() == {"status": "healthy"}

    def test_root(self, test_client):
        """Test the welcome message."""
        assert test_client.get("/").json()["docs_url"] == "/docs"
