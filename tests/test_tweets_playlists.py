"""Tests for tweets and playlists."""

from conftest import auth


class TestTweets:

    def test_create_and_list_tweets(self, client, make_user):
        author = make_user(username="poster")
        fan = make_user()
        tweet = client.post("/api/v1/tweets/", json={"content": "  hello world "}, headers=auth(author))
        client.post(f"/api/v1/likes/toggle/t/{tweet.json()['data']['id']}", headers=auth(fan))

        assert tweet.status_code == 201
        assert tweet.json()["data"]["content"] == "hello world"

        mine = client.get(f"/api/v1/tweets/user/{author}", headers=auth(fan)).json()["data"]
        assert len(mine) == 1
        assert mine[0]["owner"]["username"] == "poster"
        assert mine[0]["likes_count"] == 1
        assert mine[0]["liked_by"][0]["id"] == fan

        everyone = client.get("/api/v1/tweets/", headers=auth(fan)).json()["data"]
        assert [t["id"] for t in everyone] == [mine[0]["id"]]

    def test_empty_tweet_is_rejected(self, client, make_user):
        author = make_user()

        response = client.post("/api/v1/tweets/", json={"content": ""}, headers=auth(author))

        assert response.status_code == 400

    def test_tweets_of_unknown_user(self, client, make_user):
        user = make_user()

        response = client.get(f"/api/v1/tweets/user/{'9' * 32}", headers=auth(user))

        assert response.status_code == 404

    def test_user_without_tweets_gets_empty_list(self, client, make_user):
        user = make_user()

        response = client.get(f"/api/v1/tweets/user/{user}", headers=auth(user))

        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_owner_updates_tweet(self, client, make_user):
        author = make_user()
        tweet = client.post("/api/v1/tweets/", json={"content": "draft"}, headers=auth(author)).json()["data"]

        response = client.patch(f"/api/v1/tweets/{tweet['id']}", json={"content": "final"}, headers=auth(author))

        assert response.status_code == 200
        assert response.json()["data"]["content"] == "final"


class TestPlaylists:

    def test_create_playlist_with_optional_description(self, client, make_user):
        owner = make_user()

        response = client.post("/api/v1/playlist/", json={"name": "Watch later"}, headers=auth(owner))

        assert response.status_code == 201
        playlist = response.json()["data"]
        assert playlist["name"] == "Watch later"
        assert playlist["description"] == ""
        assert playlist["videos"] == []
        assert playlist["total_videos"] == 0

    def test_create_playlist_requires_name(self, client, make_user):
        owner = make_user()

        response = client.post("/api/v1/playlist/", json={"description": "no name"}, headers=auth(owner))

        assert response.status_code == 400

    def test_add_is_idempotent_and_remove_works(self, client, make_user, make_video):
        owner = make_user()
        first = make_video(owner, title="one", views=3)
        second = make_video(owner, title="two", views=4)
        playlist = client.post("/api/v1/playlist/", json={"name": "mix"}, headers=auth(owner)).json()["data"]["id"]

        client.patch(f"/api/v1/playlist/add/{first}/{playlist}", headers=auth(owner))
        client.patch(f"/api/v1/playlist/add/{second}/{playlist}", headers=auth(owner))
        again = client.patch(f"/api/v1/playlist/add/{first}/{playlist}", headers=auth(owner))

        assert again.status_code == 200
        assert again.json()["data"]["total_videos"] == 2
        assert again.json()["data"]["total_views"] == 7

        removed = client.patch(f"/api/v1/playlist/remove/{first}/{playlist}", headers=auth(owner))
        assert [v["title"] for v in removed.json()["data"]["videos"]] == ["two"]

    def test_add_missing_video(self, client, make_user):
        owner = make_user()
        playlist = client.post("/api/v1/playlist/", json={"name": "mix"}, headers=auth(owner)).json()["data"]["id"]

        response = client.patch(f"/api/v1/playlist/add/{'7' * 32}/{playlist}", headers=auth(owner))

        assert response.status_code == 404

    def test_update_get_and_delete(self, client, make_user):
        owner = make_user()
        playlist = client.post("/api/v1/playlist/", json={"name": "old"}, headers=auth(owner)).json()["data"]["id"]

        updated = client.patch(
            f"/api/v1/playlist/{playlist}", json={"name": "new", "description": "desc"}, headers=auth(owner)
        )
        fetched = client.get(f"/api/v1/playlist/{playlist}", headers=auth(owner))
        listed = client.get(f"/api/v1/playlist/user/{owner}", headers=auth(owner))
        deleted = client.delete(f"/api/v1/playlist/{playlist}", headers=auth(owner))
        missing = client.get(f"/api/v1/playlist/{playlist}", headers=auth(owner))

        assert updated.json()["data"]["name"] == "new"
        assert fetched.json()["data"]["description"] == "desc"
        assert [p["id"] for p in listed.json()["data"]] == [playlist]
        assert deleted.status_code == 200
        assert missing.status_code == 404

    def test_update_with_no_fields_is_rejected(self, client, make_user):
        owner = make_user()
        playlist = client.post("/api/v1/playlist/", json={"name": "old"}, headers=auth(owner)).json()["data"]["id"]

        response = client.patch(f"/api/v1/playlist/{playlist}", json={}, headers=auth(owner))

        assert response.status_code == 400
