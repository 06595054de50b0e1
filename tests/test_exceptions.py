import pytest

from toolkit import (
    BodyTooLargeError,
    EmptySlugError,
    FileTypeNotPermittedError,
    InvalidJSONTargetError,
    MalformedJSONError,
    NoFileUploadedError,
    RemotePostError,
    UploadPersistError,
    UploadTooLargeError,
    handle_toolkit_exception,
)


@pytest.mark.parametrize("error, status_code", [
    (UploadTooLargeError("the uploaded file is too big"), 413),
    (BodyTooLargeError("body must not be larger than 1 bytes"), 413),
    (FileTypeNotPermittedError("file type not permitted"), 415),
    (MalformedJSONError("body contains badly formed JSON at character 1"), 400),
    (EmptySlugError("slugified string is empty"), 400),
    (NoFileUploadedError("no file was uploaded"), 400),
    (RemotePostError("connection refused"), 400),
    (InvalidJSONTargetError("error unmarshalling JSON"), 500),
    (UploadPersistError("could not save"), 500),
    (RuntimeError("unexpected"), 500),
])
def test_handle_toolkit_exception(error, status_code):
    http_exception = handle_toolkit_exception(error)

    assert http_exception.status_code == status_code
    assert http_exception.detail == str(error)
