"""Unit tests for ProductRepository on in-memory SQLite."""

from catalog.app.models import Product


class TestProductRepository:
    """Test find/save/delete against a real session."""

    def test_save_assigns_id(self, repo):
        saved = repo.save(Product(name="Widget", description="A widget", price=9.99))

        assert isinstance(saved.id, int)
        assert repo.find_by_id(saved.id).name == "Widget"

    def test_save_with_id_overwrites_row(self, repo, session):
        saved = repo.save(Product(name="Widget", description="A widget", price=9.99))
        pid = saved.id
        session.expunge(saved)

        repo.save(Product(id=pid, name="Widget v2", description="", price=19.99))

        assert repo.count() == 1
        stored = repo.find_by_id(pid)
        assert stored.name == "Widget v2"
        assert stored.description == ""
        assert stored.price == 19.99

    def test_find_by_id_missing(self, repo):
        assert repo.find_by_id(12345) is None

    def test_find_all(self, repo):
        repo.save(Product(name="a", price=1.0))
        repo.save(Product(name="b", price=2.0))

        names = sorted(p.name for p in repo.find_all())
        assert names == ["a", "b"]

    def test_delete_removes_row(self, repo):
        saved = repo.save(Product(name="gone", price=1.0))
        pid = saved.id

        repo.delete(saved)

        assert repo.find_by_id(pid) is None
        assert repo.count() == 0
