# flask_app/routes/api.py

"""
API routes for volunteer derived values (JSON endpoints)
"""

from http import HTTPStatus

from flask import current_app, jsonify, request

from flask_app.models import User, db
from flask_app.services.volunteer_profile_service import VolunteerProfileService


def _coerce_bool(candidate, *, default):
    if candidate is None:
        return default
    value = str(candidate).strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _get_user_or_404(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        return None, (jsonify({"error": f"User {user_id} not found"}), HTTPStatus.NOT_FOUND)
    return user, None


def _parse_limit(raw_limit):
    """Ranking page size from the query string, clamped to the configured maximum"""
    default_limit = current_app.config.get("VOLUNTEER_RANKING_DEFAULT_LIMIT", 25)
    max_limit = current_app.config.get("VOLUNTEER_RANKING_MAX_LIMIT", 500)
    if raw_limit is None or raw_limit == "":
        return default_limit
    limit = int(raw_limit)  # ValueError handled by caller
    if limit < 1:
        raise ValueError("limit must be positive")
    return min(limit, max_limit)


def register_api_routes(app):
    """Register API routes"""

    @app.route("/api/volunteers/<int:user_id>/profile", methods=["GET"])
    def api_volunteer_profile(user_id):
        """
        Public profile with derived values.
        ``?sessions=false`` skips loading past sessions; hours are then reported as null.
        """
        user, error_response = _get_user_or_404(user_id)
        if error_response:
            return error_response

        load_sessions = _coerce_bool(request.args.get("sessions"), default=True)
        try:
            profile = VolunteerProfileService.parse_profile(user, load_sessions=load_sessions)
        except Exception as e:
            current_app.logger.error(f"Error building profile for user {user_id}: {str(e)}", exc_info=True)
            return (
                jsonify({"error": "An error occurred while building the profile"}),
                HTTPStatus.INTERNAL_SERVER_ERROR,
            )
        return jsonify(profile)

    @app.route("/api/volunteers/<int:user_id>/hours", methods=["GET"])
    def api_volunteer_hours(user_id):
        """Verified session hours for a volunteer"""
        user, error_response = _get_user_or_404(user_id)
        if error_response:
            return error_response
        if not user.is_volunteer:
            return jsonify({"error": f"User {user_id} is not a volunteer"}), HTTPStatus.BAD_REQUEST

        return jsonify({"id": user.id, "verified_hours": VolunteerProfileService.verified_hours(user)})

    @app.route("/api/volunteers/ranking", methods=["GET"])
    def api_volunteer_ranking():
        """Volunteers ordered by outreach priority, highest first"""
        try:
            limit = _parse_limit(request.args.get("limit"))
        except ValueError:
            return jsonify({"error": "limit must be a positive integer"}), HTTPStatus.BAD_REQUEST

        try:
            ranked = VolunteerProfileService.rank_volunteers(limit=limit)
        except Exception as e:
            current_app.logger.error(f"Error ranking volunteers: {str(e)}", exc_info=True)
            return (
                jsonify({"error": "An error occurred while ranking volunteers", "results": []}),
                HTTPStatus.INTERNAL_SERVER_ERROR,
            )

        current_app.logger.info(f"Volunteer ranking returned {len(ranked)} results")
        return jsonify({"results": [entry.as_dict() for entry in ranked]})

    @app.route("/api/volunteers/<int:user_id>/phone", methods=["PUT"])
    def api_update_volunteer_phone(user_id):
        """Set a user's phone from free-form input; stored in canonical form"""
        user, error_response = _get_user_or_404(user_id)
        if error_response:
            return error_response

        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or "phone" not in payload:
            return jsonify({"error": "Request body must be a JSON object with a 'phone' field"}), HTTPStatus.BAD_REQUEST

        raw_phone = payload["phone"]
        if raw_phone is not None and not isinstance(raw_phone, str):
            return jsonify({"error": "'phone' must be a string or null"}), HTTPStatus.BAD_REQUEST

        stored, error = VolunteerProfileService.update_phone(user, raw_phone)
        if error:
            return jsonify({"error": "Could not update phone number"}), HTTPStatus.INTERNAL_SERVER_ERROR

        return jsonify({"id": user.id, "phone": stored, "phone_pretty": VolunteerProfileService.display_phone(user)})
