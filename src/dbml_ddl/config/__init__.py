from dbml_ddl.config.settings import DDLConfig, get_config, set_config
