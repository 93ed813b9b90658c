from sqlalchemy.dialects import postgresql

from prepforge.repository.crud.answer import compute_overall_score, week_bucket


def test_week_bucket_truncates_in_the_given_timezone():
    compiled = week_bucket("America/New_York").compile(
        dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}
    )
    sql = str(compiled)

    assert "date_trunc('week', timezone('America/New_York', answers.created_at))" in sql


def test_overall_score_is_mean_of_present_sub_scores():
    fields = {"relevance_score": 8, "clarity_score": 6, "depth_score": 7, "star_method_score": 9, "communication_score": None}

    assert compute_overall_score(fields) == 7.5
    assert compute_overall_score({"relevance_score": 7.1, "clarity_score": 7.2, "depth_score": 7.3}) == 7.2
    assert compute_overall_score({}) == 0.0
