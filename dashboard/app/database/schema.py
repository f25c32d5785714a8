"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Raw DDL statements for the data-source store.
"""

SCHEMA_DDL = [
    """
    CREATE TABLE IF NOT EXISTS dash_data_source (
        id                  NUMBER GENERATED BY DEFAULT AS IDENTITY,
        org_id              NUMBER NOT NULL,
        name                VARCHAR2(190) NOT NULL,
        type                VARCHAR2(255) NOT NULL,
        access_mode         VARCHAR2(16) DEFAULT 'proxy' NOT NULL,
        url                 VARCHAR2(255),
        is_default          NUMBER(1) DEFAULT 0 NOT NULL,
        basic_auth          NUMBER(1) DEFAULT 0 NOT NULL,
        basic_auth_user     VARCHAR2(255),
        basic_auth_password VARCHAR2(255),
        with_credentials    NUMBER(1) DEFAULT 0 NOT NULL,
        json_data           JSON,
        user_name           VARCHAR2(255),
        password            VARCHAR2(255),
        database_name       VARCHAR2(255),
        created             TIMESTAMP(9) WITH LOCAL TIME ZONE DEFAULT SYSTIMESTAMP,
        CONSTRAINT dash_data_source_pk PRIMARY KEY (id),
        CONSTRAINT dash_data_source_uq UNIQUE (org_id, name),
        CONSTRAINT dash_data_source_access_ck CHECK (access_mode IN ('proxy', 'direct'))
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS dash_plugin_setting (
        org_id    NUMBER NOT NULL,
        plugin_id VARCHAR2(190) NOT NULL,
        enabled   NUMBER(1) DEFAULT 1 NOT NULL,
        updated   TIMESTAMP(9) WITH LOCAL TIME ZONE DEFAULT SYSTIMESTAMP,
        CONSTRAINT dash_plugin_setting_pk PRIMARY KEY (org_id, plugin_id)
    )
    """,
]
