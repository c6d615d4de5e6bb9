"""Gunicorn config for deployment."""


def post_worker_init(worker):
    """The app module is loaded by now; make sure its session is open and reading."""
    from leathercraft_hq import data_state as ds
    dashboard = ds.start()
    if dashboard.coordinator.session_error is not None:
        worker.log.warning("Dashboard session failed: %s", dashboard.coordinator.session_error)
        return
    ds.refresh()
    worker.log.info("Live feeds started for %s", dashboard.coordinator.user_id)


def worker_exit(server, worker):
    """Release every Supabase listener held by the exiting worker."""
    from leathercraft_hq import data_state as ds
    ds.stop()
