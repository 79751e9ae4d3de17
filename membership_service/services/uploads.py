"""Pulls the optional proof-of-purchase image out of a multipart request and
enforces the size and type limits before any email is rendered.
"""

from werkzeug.exceptions import BadRequest, RequestEntityTooLarge

from membership_service.exceptions import FileTooLarge, UnsupportedFileType, UploadError
from membership_service.models import ProofImage

IMAGE_FIELD = "giftCardImage"
ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/gif"})

# Headroom on top of the image limit for the text fields of the form.
FORM_OVERHEAD_BYTES = 64 * 1024


def max_content_length(max_upload_bytes):
    return max_upload_bytes + FORM_OVERHEAD_BYTES


def parse_proof_image(files, max_bytes, field=IMAGE_FIELD):
    """Return the uploaded image as a ProofImage, or None when no file was sent."""
    storage = files.get(field)
    if storage is None or not storage.filename:
        return None

    mimetype = (storage.mimetype or "").lower()
    if mimetype not in ALLOWED_IMAGE_TYPES:
        raise UnsupportedFileType(mimetype)

    try:
        content = storage.read(max_bytes + 1)
    except OSError as exc:
        raise UploadError() from exc

    if len(content) > max_bytes:
        raise FileTooLarge(max_bytes)

    return ProofImage(content=content, mimetype=mimetype, filename=storage.filename)


def read_form(request, max_bytes):
    """
    Return (form, proof_image) for the current request.
    Werkzeug rejects bodies over MAX_CONTENT_LENGTH while parsing; that is
    reported as FileTooLarge like an oversized image.
    """
    try:
        form = request.form
        proof_image = parse_proof_image(request.files, max_bytes)
    except RequestEntityTooLarge as exc:
        raise FileTooLarge(max_bytes) from exc
    except BadRequest as exc:
        raise UploadError() from exc
    return form, proof_image
