"""
Rename Drafts
Keeps the name a user is typing separate from the saved name, so a refetch
doesn't silently drop unsaved edits and a failed save doesn't corrupt either.
"""


class RenameDraft:
    """
    Local draft of a record's name.

    saved_name is the last name confirmed by the API; value is what the user
    is editing.
    """

    def __init__(self, record_id, saved_name=""):
        self.record_id = record_id
        self.saved_name = saved_name or ""
        self.value = self.saved_name

    @property
    def is_dirty(self):
        return self.value != self.saved_name

    def edit(self, value):
        self.value = value or ""
        return self

    def discard(self):
        self.value = self.saved_name
        return self

    def reconcile(self, fetched_name):
        """
        Adopt the name from a fresh fetch.
        Unsaved edits are kept; a clean draft follows the fetched name.
        """
        fetched_name = fetched_name or ""
        dirty = self.is_dirty
        self.saved_name = fetched_name
        if not dirty:
            self.value = fetched_name
        return self

    def save(self, save_fn):
        """
        Persist the draft with save_fn(record_id, name).

        The draft is promoted to the saved name only after save_fn succeeds;
        on failure both values stay as they were and the error propagates.
        """
        result = save_fn(self.record_id, self.value)
        self.saved_name = self.value
        return result
