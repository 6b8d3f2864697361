from datetime import datetime, timezone
from typing import Any, Callable

from azure.core.pipeline import PipelineRequest, PipelineResponse
from azure.core.pipeline.policies import AsyncHTTPPolicy, HTTPPolicy

from fixarm.utils import utc

DateHeader = "Date"
# locale independent names as defined in RFC 1123
WeekDays = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
Months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def format_date_header(dt: datetime) -> str:
    """
    Render the given point in time as RFC 1123 date in the form: EEE, dd MMM yyyy HH:mm:ss 'GMT'.
    Naive datetime values are expected to be UTC.
    """
    at = dt.astimezone(timezone.utc) if dt.tzinfo is not None else dt
    return (
        f"{WeekDays[at.weekday()]}, {at.day:02d} {Months[at.month - 1]} {at.year:04d} "
        f"{at.hour:02d}:{at.minute:02d}:{at.second:02d} GMT"
    )


class AddDatePolicy(HTTPPolicy):  # type: ignore
    """
    Adds the Date header in RFC 1123 format to every request sent through the pipeline.
    The time is taken when the request is sent, so every retry gets a fresh value.
    """

    def __init__(self, clock: Callable[[], datetime] = utc) -> None:
        super().__init__()
        self.clock = clock

    def send(self, request: PipelineRequest) -> PipelineResponse:  # type: ignore
        request.http_request.headers[DateHeader] = format_date_header(self.clock())
        response: PipelineResponse = self.next.send(request)  # type: ignore
        return response


class AsyncAddDatePolicy(AsyncHTTPPolicy):  # type: ignore
    """
    Async version of the AddDatePolicy.
    """

    def __init__(self, clock: Callable[[], datetime] = utc) -> None:
        super().__init__()
        self.clock = clock

    async def send(self, request: PipelineRequest) -> Any:  # type: ignore
        request.http_request.headers[DateHeader] = format_date_header(self.clock())
        return await self.next.send(request)
