"""
utils/attachments.py
-----------------
Save an entity whose form carries an image picker.

The upload always completes before the document is written, since the
document only stores the URL. A failed upload raises and nothing is
saved.
"""

from utils.db import get_uploader


def has_file(file):
    return file is not None and bool(getattr(file, "filename", ""))


def _save(repo, fields, doc_id):
    if doc_id:
        return repo.update(doc_id, fields)
    return repo.create(fields)


def save_with_image(repo, fields, doc_id=None, file=None, folder=None,
                    field="image_url", uploader=None):
    fields = dict(fields)
    if has_file(file):
        uploader = uploader or get_uploader()
        fields[field] = uploader.upload(file, folder)
    return _save(repo, fields, doc_id)


def save_with_images(repo, fields, doc_id=None, files=(), folder=None,
                     field="images", uploader=None):
    """Like save_with_image for list fields: new URLs are appended to fields[field]."""
    fields = dict(fields)
    urls = list(fields.get(field) or [])
    pending = [f for f in files or () if has_file(f)]
    if pending:
        uploader = uploader or get_uploader()
        urls.extend(uploader.upload(f, folder) for f in pending)
    fields[field] = urls
    return _save(repo, fields, doc_id)
