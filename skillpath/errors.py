from __future__ import annotations

from fastapi import HTTPException, status

from skillpath.clients.analysis_api import AnalysisApiError, is_not_analyzed


REMEDY_UPLOAD_RESUME = "upload_resume"
REMEDY_BACK_TO_RECOMMENDATIONS = "back_to_recommendations"

NOT_ANALYZED_RECOMMENDATIONS_MESSAGE = "Please upload your resume first to get career recommendations."


def to_http_exception(exc: AnalysisApiError, *, not_analyzed_message: str | None = None) -> HTTPException:
    """Map a remote failure to the client-facing error taxonomy.

    NotAnalyzed -> 409 with an upload remedy; anything else keeps the remote message verbatim.
    """

    if is_not_analyzed(exc.message):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": not_analyzed_message or exc.message, "remedy": REMEDY_UPLOAD_RESUME},
        )

    if exc.status_code == status.HTTP_404_NOT_FOUND:
        code = status.HTTP_404_NOT_FOUND
    elif exc.status_code == status.HTTP_401_UNAUTHORIZED:
        code = status.HTTP_401_UNAUTHORIZED
    else:
        code = status.HTTP_502_BAD_GATEWAY
    return HTTPException(status_code=code, detail={"message": exc.message, "remedy": REMEDY_BACK_TO_RECOMMENDATIONS})
