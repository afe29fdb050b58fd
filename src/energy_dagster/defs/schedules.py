import dagster as dg

energy_etl_job = dg.define_asset_job(
    name="energy_etl_job",
    selection=dg.AssetSelection.all(),
    description="Extract, transform, check and load the country and regional energy tables.",
)


@dg.schedule(cron_schedule="0 2 * * *", job=energy_etl_job, execution_timezone="UTC")
def energy_refresh_schedule(context: dg.ScheduleEvaluationContext):
    """Refresh the energy tables every day at 02:00 UTC."""
    scheduled = context.scheduled_execution_time
    return dg.RunRequest(run_key=scheduled.strftime("%Y-%m-%d") if scheduled else None)
