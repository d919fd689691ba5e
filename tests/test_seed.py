from stash.data.seed import seed_admin
from stash.repos.user_repo import UserRepo
from tests.helpers import auth


class TestSeedAdmin:
    def test_creates_admin_once(self, client, db):
        assert seed_admin(db, "root@stash.gg", "rootpass") is True
        assert seed_admin(db, "root@stash.gg", "rootpass") is False

        user = UserRepo(db).get_user_by_email("root@stash.gg")
        assert user.roles == ["admin"]

        token = client.post("/auth/login", json={"email": "root@stash.gg", "password": "rootpass"}).json()["token"]
        assert client.get("/admin/test", headers=auth(token)).status_code == 200

    def test_skipped_without_config(self, db):
        assert seed_admin(db, None, None) is False
