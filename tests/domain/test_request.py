import pytest

from domain.exceptions import UnexpectedTypeError
from domain.request import FileBag, HttpRequest, ParameterBag
from domain.uploaded_file import UploadedFile, UploadError


@pytest.fixture
def upload_path(tmp_path):
    path = tmp_path / "upload.tmp"
    path.touch()
    return str(path)


def _record(path, name="upload.png", error=UploadError.OK):
    return {"error": error, "name": name, "size": 123, "tmp_name": path, "type": "image/png"}


class TestParameterBag:
    def test_get_with_default(self):
        bag = ParameterBag({"a": 1})
        assert bag.get("a") == 1
        assert bag.get("b") is None
        assert bag.get("b", {}) == {}

    def test_all_returns_copy(self):
        bag = ParameterBag({"a": 1})
        copied = bag.all()
        copied["b"] = 2
        assert bag.has("b") is False

    def test_keeps_order(self):
        bag = ParameterBag({"z": 1, "a": 2, "m": 3})
        assert bag.keys() == ["z", "a", "m"]
        assert list(bag) == ["z", "a", "m"]
        assert len(bag) == 3
        assert "a" in bag


class TestFileBag:
    def test_flat_record_becomes_uploaded_file(self, upload_path):
        bag = FileBag({"image": _record(upload_path)})
        assert bag.get("image") == UploadedFile(upload_path, "upload.png", "image/png", 123)

    def test_attribute_first_layout_is_fixed(self, upload_path):
        bag = FileBag({
            "author": {
                "error": {"image": 0},
                "name": {"image": "upload.png"},
                "size": {"image": 123},
                "tmp_name": {"image": upload_path},
                "type": {"image": "image/png"},
            }
        })
        assert bag.get("author") == {"image": UploadedFile(upload_path, "upload.png", "image/png", 123)}

    def test_attribute_first_layout_deeply_nested(self, upload_path):
        bag = FileBag({
            "author": {
                "error": {"photos": {"front": 0}},
                "name": {"photos": {"front": "front.png"}},
                "size": {"photos": {"front": 1}},
                "tmp_name": {"photos": {"front": upload_path}},
                "type": {"photos": {"front": "image/png"}},
            }
        })
        assert bag.get("author")["photos"]["front"].original_name == "front.png"

    def test_attribute_first_layout_with_lists(self, upload_path):
        bag = FileBag({
            "docs": {
                "error": [0, 4],
                "name": ["a.txt", ""],
                "size": [3, 0],
                "tmp_name": [upload_path, ""],
                "type": ["text/plain", ""],
            }
        })
        docs = bag.get("docs")
        assert docs[0].original_name == "a.txt"
        assert docs[1] is None

    def test_no_file_becomes_none(self):
        bag = FileBag({"image": _record("", name="", error=UploadError.NO_FILE)})
        assert bag.has("image") is True
        assert bag.get("image") is None

    def test_nested_flat_records(self, upload_path):
        bag = FileBag({"author": {"image": _record(upload_path)}})
        assert isinstance(bag.get("author")["image"], UploadedFile)

    def test_top_level_list_of_records(self, upload_path):
        bag = FileBag({"attachment": [_record(upload_path, name="a.png"), _record(upload_path, name="b.png")]})

        attachments = bag.get("attachment")
        assert [f.original_name for f in attachments] == ["a.png", "b.png"]
        assert all(isinstance(f, UploadedFile) for f in attachments)

    def test_top_level_list_with_empty_input(self, upload_path):
        bag = FileBag({"attachment": [_record(upload_path), _record("", name="", error=UploadError.NO_FILE)]})
        assert bag.get("attachment")[1] is None

    def test_uploaded_file_kept_as_is(self, upload_path):
        uploaded = UploadedFile(upload_path, "upload.png")
        bag = FileBag({"image": uploaded})
        assert bag.get("image") is uploaded

    def test_scalar_value_rejected(self):
        with pytest.raises(UnexpectedTypeError):
            FileBag({"image": "upload.png"})


class TestHttpRequest:
    def test_method_defaults_to_get(self):
        assert HttpRequest().method == "GET"

    def test_method_is_upper_cased(self):
        request = HttpRequest(server={"REQUEST_METHOD": "patch"})
        assert request.method == "PATCH"
        assert request.is_method("Patch") is True
        assert request.is_mutating() is True

    def test_get_is_not_mutating(self):
        assert HttpRequest(server={"REQUEST_METHOD": "GET"}).is_mutating() is False

    def test_override_from_header(self):
        request = HttpRequest(
            headers={"X-HTTP-Method-Override": "delete"},
            request={"_method": "PUT"},
            server={"REQUEST_METHOD": "POST"},
        )
        assert request.method == "DELETE"

    def test_override_from_body_parameter(self):
        request = HttpRequest(request={"_method": "put"}, server={"REQUEST_METHOD": "POST"})
        assert request.method == "PUT"

    def test_override_only_applies_to_post(self):
        request = HttpRequest(request={"_method": "DELETE"}, server={"REQUEST_METHOD": "PUT"})
        assert request.method == "PUT"

    def test_override_can_be_disabled(self):
        request = HttpRequest(
            request={"_method": "PUT"},
            server={"REQUEST_METHOD": "POST"},
            method_override=False,
        )
        assert request.method == "POST"

    def test_headers_are_case_insensitive(self):
        request = HttpRequest(headers={"Content-Type": "text/plain"})
        assert request.headers["content-type"] == "text/plain"
