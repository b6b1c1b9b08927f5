from dbml_ddl.ingest.query_executor import RowBuilder, dataclass_row_builder, execute_query
