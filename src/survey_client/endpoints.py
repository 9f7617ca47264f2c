"""Table of backend endpoints consumed by the client."""

from __future__ import annotations

from dataclasses import dataclass
from string import Formatter
from typing import Any, Literal

from survey_client.errors import MissingPathParameterError, UnknownEndpointError

type HttpMethod = Literal["GET", "POST", "PUT"]


@dataclass(frozen=True)
class Endpoint:
    """One backend route: a verb, a path template and whether it takes a body."""

    name: str
    method: HttpMethod
    path: str
    has_body: bool = False
    summary: str = ""

    @property
    def path_params(self) -> tuple[str, ...]:
        return tuple(field for _, field, _, _ in Formatter().parse(self.path) if field)

    def build_path(self, **params: Any) -> str:
        """Interpolate path parameters verbatim into the template."""
        missing = [name for name in self.path_params if name not in params]
        if missing:
            raise MissingPathParameterError(f"{self.name} requires path parameters: {', '.join(missing)}")
        return self.path.format(**{name: params[name] for name in self.path_params})


LOGIN = Endpoint("login", "POST", "/login", has_body=True, summary="authenticate")
REGISTER = Endpoint("register", "POST", "/register", has_body=True, summary="create account")

STUDENT_SUBJECTS = Endpoint("student_subjects", "GET", "/student/subjects", summary="list enrolled subjects")
STUDENT_SURVEYS = Endpoint("student_surveys", "GET", "/student/surveys", summary="list open surveys")
SURVEY_BY_ID = Endpoint("survey_by_id", "GET", "/student/surveys/{survey_id}", summary="fetch one survey")
SUBMIT_RESPONSE = Endpoint("submit_response", "POST", "/student/responses", has_body=True, summary="submit an answer")
STUDENT_RESPONSES = Endpoint("student_responses", "GET", "/student/responses", summary="list own responses")

PROFESSOR_SUBJECTS = Endpoint("professor_subjects", "GET", "/professor/subjects", summary="list taught subjects")
PROFESSOR_SURVEYS = Endpoint("professor_surveys", "GET", "/professor/surveys", summary="list own surveys")
CREATE_SURVEY = Endpoint("create_survey", "POST", "/professor/surveys", has_body=True, summary="create a survey")
ADD_QUESTION = Endpoint(
    "add_question",
    "POST",
    "/professor/surveys/{survey_id}/questions",
    has_body=True,
    summary="add a question to a survey",
)
PROFESSOR_RESPONSES = Endpoint("professor_responses", "GET", "/professor/responses", summary="read responses")
SURVEY_RESPONSES = Endpoint(
    "survey_responses", "GET", "/professor/surveys/{survey_id}/responses", summary="read one survey's responses"
)

CREATE_SEMESTER = Endpoint("create_semester", "POST", "/admin/semesters", has_body=True, summary="create a semester")
SEMESTERS = Endpoint("semesters", "GET", "/admin/semesters", summary="list semesters")
ACTIVATE_SEMESTER = Endpoint(
    "activate_semester", "PUT", "/admin/semesters/{semester_id}/activate", summary="activate a semester"
)
CREATE_SUBJECT = Endpoint("create_subject", "POST", "/admin/subjects", has_body=True, summary="create a subject")
SUBJECTS = Endpoint("subjects", "GET", "/admin/subjects", summary="list subjects")
CREATE_ENROLLMENT = Endpoint(
    "create_enrollment", "POST", "/admin/enrollments", has_body=True, summary="enroll a student"
)
ENROLLMENTS = Endpoint("enrollments", "GET", "/admin/enrollments", summary="list enrollments")
ALL_RESPONSES = Endpoint("all_responses", "GET", "/admin/responses", summary="list every response")
ALL_USERS = Endpoint("all_users", "GET", "/admin/users", summary="list every user")

ENDPOINTS: dict[str, Endpoint] = {
    endpoint.name: endpoint
    for endpoint in (
        LOGIN,
        REGISTER,
        STUDENT_SUBJECTS,
        STUDENT_SURVEYS,
        SURVEY_BY_ID,
        SUBMIT_RESPONSE,
        STUDENT_RESPONSES,
        PROFESSOR_SUBJECTS,
        PROFESSOR_SURVEYS,
        CREATE_SURVEY,
        ADD_QUESTION,
        PROFESSOR_RESPONSES,
        SURVEY_RESPONSES,
        CREATE_SEMESTER,
        SEMESTERS,
        ACTIVATE_SEMESTER,
        CREATE_SUBJECT,
        SUBJECTS,
        CREATE_ENROLLMENT,
        ENROLLMENTS,
        ALL_RESPONSES,
        ALL_USERS,
    )
}


def get_endpoint(name: str) -> Endpoint:
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise UnknownEndpointError(f"unknown endpoint: {name}") from None
