from prepforge.main import initialize_backend_application


def test_openapi_includes_all_routes_without_startup():
    app = initialize_backend_application()
    schema = app.openapi()

    paths = schema["paths"]
    for path in (
        "/api/health",
        "/api/users",
        "/api/users/{user_id}",
        "/api/generate-questions",
        "/api/generate-feedback",
        "/api/generate-follow-up",
        "/api/interviews/{interview_id}/complete",
        "/api/interviews/{interview_id}/abandon",
        "/api/user-stats/{user_id}",
        "/api/user-stats/{user_id}/reconcile",
        "/api/interview-history/{user_id}",
        "/api/interview-details/{interview_id}",
        "/api/analytics/{user_id}",
        "/api/skills/{user_id}",
        "/api/timer-config",
        "/api/bookmarks/save",
        "/api/bookmarks/user/{user_id}",
        "/api/bookmarks/user/{user_id}/tags",
        "/api/bookmarks/{set_id}/favorite",
        "/api/bookmarks/{set_id}/practice",
        "/api/bookmarks/{set_id}",
    ):
        assert path in paths

    tag_names = {t.get("name") for t in schema.get("tags", [])}
    assert {"users", "interviews", "history", "bookmarks"}.issubset(tag_names)


def test_request_schemas_use_camel_case():
    schema = initialize_backend_application().openapi()
    schemas = schema["components"]["schemas"]

    props = schemas["GenerateQuestionsRequest"]["properties"]
    assert {"jobRole", "company", "numberOfQuestions", "questionType", "userId"} <= set(props)
    assert "questionId" in schemas["GenerateFeedbackRequest"]["properties"]
