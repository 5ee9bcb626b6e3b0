"""
Aggregated read views.

Everything here is a pure function of already-loaded rows: a primary
collection (videos, comments, tweets, playlists), the users they reference
and the likes pointing at them. Repository functions in the sibling
services fetch the rows; these functions only join and project.
"""

from typing import Any, Dict, Iterable, List, Optional

from videotube.models import Comment, Like, Playlist, Tweet, User, Video


def identity(user: Optional[User]) -> Optional[Dict[str, Any]]:
    """Public identity of a user: the only user fields ever embedded in other views."""
    if user is None:
        return None
    return {
        "id": user.id,
        "full_name": user.full_name,
        "username": user.username,
        "avatar": user.avatar,
    }


def index_users(users: Iterable[User]) -> Dict[str, User]:
    return {u.id: u for u in users}


def likers_by_target(likes: Iterable[Like], users: Dict[str, User], target_attr: str) -> Dict[str, List[Dict]]:
    """Group liker identities by the id stored in ``target_attr`` of each like."""
    grouped: Dict[str, List[Dict]] = {}
    for like in likes:
        target_id = getattr(like, target_attr)
        if target_id is None:
            continue
        liker = identity(users.get(like.liked_by_id))
        if liker is not None:
            grouped.setdefault(target_id, []).append(liker)
    return grouped


def video_fields(video: Video) -> Dict[str, Any]:
    return {
        "id": video.id,
        "title": video.title,
        "description": video.description,
        "video_file": video.video_file,
        "thumbnail": video.thumbnail,
        "duration": video.duration,
        "views": video.views,
        "is_published": video.is_published,
        "owner_id": video.owner_id,
        "created_at": video.created_at,
        "updated_at": video.updated_at,
    }


def compose_videos(videos: Iterable[Video], users: Iterable[User], likes: Iterable[Like]) -> List[Dict[str, Any]]:
    by_id = index_users(users)
    likers = likers_by_target(likes, by_id, "video_id")
    result = []
    for video in videos:
        video_likers = likers.get(video.id, [])
        result.append({
            **video_fields(video),
            "owner": identity(by_id.get(video.owner_id)),
            "likes": video_likers,
            "likes_count": len(video_likers),
        })
    return result


def compose_video_detail(
    video: Video,
    owner: Optional[User],
    likes_count: int,
    comments_count: int,
    is_liked: bool,
) -> Dict[str, Any]:
    return {
        **video_fields(video),
        "owner": identity(owner),
        "likes_count": likes_count,
        "comments_count": comments_count,
        "is_liked": is_liked,
    }


def compose_comments(comments: Iterable[Comment], users: Iterable[User], likes: Iterable[Like]) -> List[Dict[str, Any]]:
    by_id = index_users(users)
    likers = likers_by_target(likes, by_id, "comment_id")
    result = []
    for comment in comments:
        comment_likers = likers.get(comment.id, [])
        result.append({
            "id": comment.id,
            "content": comment.content,
            "video_id": comment.video_id,
            "created_at": comment.created_at,
            "updated_at": comment.updated_at,
            "owner": identity(by_id.get(comment.owner_id)),
            "likes": comment_likers,
            "likes_count": len(comment_likers),
        })
    return result


def compose_tweets(tweets: Iterable[Tweet], users: Iterable[User], likes: Iterable[Like]) -> List[Dict[str, Any]]:
    by_id = index_users(users)
    likers = likers_by_target(likes, by_id, "tweet_id")
    result = []
    for tweet in tweets:
        tweet_likers = likers.get(tweet.id, [])
        result.append({
            "id": tweet.id,
            "content": tweet.content,
            "created_at": tweet.created_at,
            "updated_at": tweet.updated_at,
            "owner": identity(by_id.get(tweet.owner_id)),
            "liked_by": tweet_likers,
            "likes_count": len(tweet_likers),
        })
    return result


def compose_playlist(playlist: Playlist, owner: Optional[User], videos: List[Video]) -> Dict[str, Any]:
    return {
        "id": playlist.id,
        "name": playlist.name,
        "description": playlist.description,
        "owner": identity(owner),
        "videos": [video_fields(v) for v in videos],
        "total_videos": len(videos),
        "total_views": sum(v.views for v in videos),
        "created_at": playlist.created_at,
        "updated_at": playlist.updated_at,
    }


def user_profile(user: User) -> Dict[str, Any]:
    return {
        **identity(user),
        "email": user.email,
        "cover_image": user.cover_image,
        "created_at": user.created_at,
    }
