# Routes for handling requests
from flask import Blueprint, current_app, jsonify, request, send_from_directory

from forms import (
    CommentForm,
    FollowForm,
    LikeForm,
    LoginForm,
    PostForm,
    PostsQuery,
    ProfileQuery,
    ProfileUpdateForm,
    ShareForm,
    SignupForm,
    parse_query,
    parse_request,
)
from services import get_services

# Create blueprints for different route categories
main_bp = Blueprint('main', __name__)
auth_bp = Blueprint('auth', __name__)
posts_bp = Blueprint('posts', __name__)
users_bp = Blueprint('users', __name__)


@main_bp.route('/uploads/<path:filename>', methods=['GET'])
def uploaded_file(filename):
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)


# Authentication Endpoints
@auth_bp.route('/signup', methods=['POST'])
def signup():
    """User Registration Endpoint"""
    form = parse_request(SignupForm, request)
    services = get_services()

    profile_image = services.assets.save(request.files.get('profileImage'), 'profileImage')
    with services.assets.kept_on_success(profile_image):
        user_id = services.accounts.signup(
            form.first_name,
            form.last_name,
            form.email,
            form.password,
            profile_image=profile_image
        )
    return jsonify({"message": "Sign up successful.", "userId": user_id}), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """User Login Endpoint"""
    form = parse_request(LoginForm, request)
    user_id = get_services().accounts.login(form.email, form.password)
    return jsonify({"message": "Login successful.", "userId": user_id}), 200


# Profile and relationship endpoints
@users_bp.route('/profile/<int:user_id>', methods=['GET'])
def get_profile(user_id):
    """Profile with follower counts; pass ?myId= to get isFollowing for that viewer"""
    query = parse_query(ProfileQuery, request)
    view = get_services().profiles.get_profile_view(user_id, viewer_id=query.my_id)
    return jsonify({"user": view.to_json()}), 200


@users_bp.route('/profile/update', methods=['POST'])
def update_profile():
    form = parse_request(ProfileUpdateForm, request)
    services = get_services()

    profile_image = services.assets.save(request.files.get('profileImage'), 'profileImage')
    with services.assets.kept_on_success(profile_image):
        user = services.accounts.update_profile(form.user_id, form.changes(), profile_image=profile_image)
    return jsonify({"message": "Profile updated successfully.", "user": user.to_json()}), 200


@users_bp.route('/user/follow', methods=['POST'])
def follow_user():
    form = parse_request(FollowForm, request)
    get_services().graph.follow(form.user_id, form.target_id)
    return jsonify({"message": "Followed successfully."}), 200


@users_bp.route('/user/unfollow', methods=['POST'])
def unfollow_user():
    form = parse_request(FollowForm, request)
    get_services().graph.unfollow(form.user_id, form.target_id)
    return jsonify({"message": "Unfollowed successfully."}), 200


@users_bp.route('/users/<int:user_id>/followers', methods=['GET'])
def get_followers(user_id):
    followers = get_services().graph.list_followers(user_id)
    return jsonify([follower.to_json() for follower in followers]), 200


@users_bp.route('/users/<int:user_id>/following', methods=['GET'])
def get_following(user_id):
    following = get_services().graph.list_following(user_id)
    return jsonify([followed.to_json() for followed in following]), 200


# Post endpoints
@posts_bp.route('/post', methods=['POST'])
def create_post():
    form = parse_request(PostForm, request)
    services = get_services()

    image = services.assets.save(request.files.get('postImage'), 'postImage')
    video = services.assets.save(request.files.get('postVideo'), 'postVideo')
    with services.assets.kept_on_success(image, video):
        post = services.feed.create_post(form.user_id, form.text, image=image, video=video)
    return jsonify({"message": "Post created successfully.", "post": post.to_json()}), 201


@posts_bp.route('/post/<int:post_id>', methods=['GET'])
def get_post(post_id):
    post = get_services().feed.get_post(post_id)
    return jsonify({"post": post.to_json()}), 200


@posts_bp.route('/post/like', methods=['POST'])
def toggle_like():
    form = parse_request(LikeForm, request)
    state = get_services().engagement.toggle_like(form.post_id, form.user_id)
    return jsonify({"message": "Post like updated.", **state.to_json()}), 200


@posts_bp.route('/post/comment', methods=['POST'])
def add_comment():
    form = parse_request(CommentForm, request)
    comments = get_services().engagement.add_comment(form.post_id, form.user_id, form.comment_text)
    return jsonify({
        "message": "Comment added.",
        "comments": [comment.to_json() for comment in comments]
    }), 200


@posts_bp.route('/post/share', methods=['POST'])
def share_post():
    form = parse_request(ShareForm, request)
    shares = get_services().engagement.increment_share(form.post_id)
    return jsonify({"message": "Post shared successfully.", "shares": shares}), 200


@posts_bp.route('/posts', methods=['GET'])
def list_posts():
    """All posts, or one author's with ?userId=, newest first"""
    query = parse_query(PostsQuery, request)
    entries = get_services().feed.list_posts(author_id=query.user_id)
    return jsonify([entry.to_json() for entry in entries]), 200
