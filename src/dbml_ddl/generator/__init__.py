from dbml_ddl.generator.sql_generator import SQLGenerator, generate_sql
