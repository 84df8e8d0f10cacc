"""
Pipeline services

Import from the concrete modules:
- gsheet_gamedata.services.table_parser
- gsheet_gamedata.services.value_coercer
- gsheet_gamedata.services.class_generator
- gsheet_gamedata.services.artifact_writer
- gsheet_gamedata.services.sheet_pipeline
"""
