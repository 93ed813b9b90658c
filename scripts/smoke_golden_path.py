import random
import string

import httpx

from scripts.smoke_utils import API, BASE_URL, data_of, print_result, safe_call


def rand_str(n: int = 8) -> str:
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=n))


def main() -> None:
    email = f"{rand_str()}@example.com"

    with httpx.Client(base_url=BASE_URL, timeout=60.0) as client:
        r, err = safe_call(client, "GET", f"{API}/health")
        print_result("GET /api/health", r, err)

        r, err = safe_call(client, "POST", f"{API}/users", json={"email": email, "name": "Smoke User"})
        print_result("POST /api/users", r, err)
        user_id = data_of(r).get("id")
        if not user_id:
            return

        r, err = safe_call(client, "GET", f"{API}/users/{user_id}")
        print_result("GET /api/users/{id}", r, err)

        r, err = safe_call(
            client,
            "POST",
            f"{API}/generate-questions",
            json={
                "jobRole": "Backend Engineer",
                "company": "Acme",
                "experience": "mid-level",
                "difficulty": "medium",
                "numberOfQuestions": 3,
                "userId": user_id,
            },
        )
        print_result("POST /api/generate-questions", r, err)
        generated = data_of(r)
        interview_id = generated.get("interviewId")
        questions = generated.get("questions") or []

        if interview_id and questions:
            first = questions[0]
            answer = (
                "In my previous team I owned the payments service. When checkout latency doubled I profiled the "
                "database calls, added an index and a small cache, and brought p95 back under 200ms within a week."
            )
            r, err = safe_call(
                client,
                "POST",
                f"{API}/generate-feedback",
                json={
                    "question": first["question"],
                    "answer": answer,
                    "userId": user_id,
                    "interviewId": interview_id,
                    "questionId": first["id"],
                    "timeSpent": 150,
                },
            )
            print_result("POST /api/generate-feedback", r, err)

            r, err = safe_call(
                client, "POST", f"{API}/generate-follow-up", json={"question": first["question"], "answer": answer}
            )
            print_result("POST /api/generate-follow-up", r, err)

            r, err = safe_call(
                client, "POST", f"{API}/interviews/{interview_id}/complete", json={"userId": user_id, "duration": 600}
            )
            print_result("POST /api/interviews/{id}/complete", r, err)

            r, err = safe_call(client, "GET", f"{API}/interview-details/{interview_id}", params={"userId": user_id})
            print_result("GET /api/interview-details/{id}", r, err)

        r, err = safe_call(client, "GET", f"{API}/user-stats/{user_id}")
        print_result("GET /api/user-stats/{id}", r, err)

        r, err = safe_call(client, "GET", f"{API}/interview-history/{user_id}", params={"page": 1, "limit": 10})
        print_result("GET /api/interview-history/{id}", r, err)

        r, err = safe_call(client, "GET", f"{API}/analytics/{user_id}", params={"days": 30})
        print_result("GET /api/analytics/{id}", r, err)

        r, err = safe_call(client, "GET", f"{API}/skills/{user_id}")
        print_result("GET /api/skills/{id}", r, err)

        r, err = safe_call(client, "GET", f"{API}/timer-config")
        print_result("GET /api/timer-config", r, err)

        if questions:
            r, err = safe_call(
                client,
                "POST",
                f"{API}/bookmarks/save",
                json={"userId": user_id, "title": "Smoke set", "questions": questions, "tags": ["smoke"]},
            )
            print_result("POST /api/bookmarks/save", r, err)
            set_id = data_of(r).get("id")
            if set_id:
                r, err = safe_call(client, "PATCH", f"{API}/bookmarks/{set_id}/favorite", json={"userId": user_id})
                print_result("PATCH /api/bookmarks/{id}/favorite", r, err)
                r, err = safe_call(client, "POST", f"{API}/bookmarks/{set_id}/practice", json={"userId": user_id})
                print_result("POST /api/bookmarks/{id}/practice", r, err)
                r, err = safe_call(client, "GET", f"{API}/bookmarks/user/{user_id}/tags")
                print_result("GET /api/bookmarks/user/{id}/tags", r, err)
                r, err = safe_call(client, "DELETE", f"{API}/bookmarks/{set_id}", json={"userId": user_id})
                print_result("DELETE /api/bookmarks/{id}", r, err)


if __name__ == "__main__":
    main()
