"""Sensors for monitoring Dagster runs."""

import dagster as dg


def format_failure_message(job_name: str, run_id: str, message: str | None) -> str:
    return f"Job {job_name} failed (run {run_id}): {message or 'no error message'}"


@dg.run_failure_sensor(
    name="energy_etl_failure_sensor",
    default_status=dg.DefaultSensorStatus.RUNNING,
)
def energy_etl_failure_sensor(context: dg.RunFailureSensorContext):
    context.log.error(
        format_failure_message(
            context.dagster_run.job_name,
            context.dagster_run.run_id,
            context.failure_event.message,
        )
    )
