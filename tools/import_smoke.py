import importlib
mods = [
  "medtrack.dates",
  "medtrack.domain.model",
  "medtrack.store.db",
  "medtrack.engine.controller",
  "medtrack.report.requester",
  "medtrack.workers.report_worker",
  "medtrack.ui.main_window",
]
for m in mods:
    importlib.import_module(m)
print("IMPORT_OK")
