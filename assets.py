# Uploaded media: stored on disk, referenced everywhere else by filename
import logging
import os
import random
import time
from contextlib import contextmanager

from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)


class AssetStore:
    def __init__(self, upload_folder):
        self.upload_folder = upload_folder
        if not os.path.isdir(upload_folder):
            os.makedirs(upload_folder, exist_ok=True)
            logger.info("Created upload folder %s", upload_folder)

    def save(self, file, field_name):
        """Store an uploaded file and return its reference, or '' for no file."""
        if file is None or not file.filename:
            return ''
        _, ext = os.path.splitext(secure_filename(file.filename))
        filename = f"{field_name}-{int(time.time() * 1000)}-{random.randint(0, 10 ** 9)}{ext}"
        file.save(os.path.join(self.upload_folder, filename))
        logger.debug("Stored upload %s", filename)
        return filename

    def discard(self, filename):
        if not filename:
            return
        try:
            os.remove(os.path.join(self.upload_folder, filename))
        except FileNotFoundError:
            return
        logger.debug("Discarded upload %s", filename)

    @contextmanager
    def kept_on_success(self, *filenames):
        """Delete the given uploads if the block raises."""
        try:
            yield
        except Exception:
            for filename in filenames:
                self.discard(filename)
            raise
