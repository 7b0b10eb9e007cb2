import threading
import time

from doc_translator.documents.locks import DocumentLocks


class TestDocumentLocks:
    def test_entry_is_dropped_after_release(self) -> None:
        locks = DocumentLocks()
        with locks.hold("doc-1"):
            assert len(locks) == 1
        assert len(locks) == 0

    def test_entry_is_dropped_when_body_raises(self) -> None:
        locks = DocumentLocks()
        try:
            with locks.hold("doc-1"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert len(locks) == 0

    def test_different_documents_do_not_block_each_other(self) -> None:
        locks = DocumentLocks()
        with locks.hold("doc-1"), locks.hold("doc-2"):
            assert len(locks) == 2

    def test_same_document_is_serialized(self) -> None:
        locks = DocumentLocks()
        order: list[str] = []
        first_inside = threading.Event()
        release_first = threading.Event()

        def first() -> None:
            with locks.hold("doc-1"):
                order.append("first-start")
                first_inside.set()
                release_first.wait(timeout=2)
                order.append("first-end")

        def second() -> None:
            first_inside.wait(timeout=2)
            with locks.hold("doc-1"):
                order.append("second")

        threads = [threading.Thread(target=first), threading.Thread(target=second)]
        for thread in threads:
            thread.start()
        first_inside.wait(timeout=2)
        time.sleep(0.05)
        assert order == ["first-start"]

        release_first.set()
        for thread in threads:
            thread.join(timeout=2)
        assert order == ["first-start", "first-end", "second"]
        assert len(locks) == 0
