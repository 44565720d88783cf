import hashlib

from indexer.core import ENCRYPTION_KEY, SYSTEM_URL

class VariantIdBuilder:
    """
    Builds variant ids: "<systemHash>/<type>/<uid>".
    Documents sharing a variant id are language/device variants of one
    logical record and can be collapsed at query time.

    Stateless, safe to share across threads.
    """

    def __init__(self, system_hash: str):
        self._system_hash = system_hash

    @classmethod
    def from_config(cls, system_url: str = SYSTEM_URL, encryption_key: str = ENCRYPTION_KEY) -> "VariantIdBuilder":
        seed = f"{system_url}{encryption_key}"
        return cls(hashlib.sha1(seed.encode('utf-8')).hexdigest())

    @property
    def system_hash(self) -> str:
        return self._system_hash

    def build_from_type_and_uid(self, record_type: str, uid) -> str:
        return f"{self._system_hash}/{record_type}/{uid}"
