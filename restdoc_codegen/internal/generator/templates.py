class Templates:
    """Шаблоны для генерации файлов"""

    types_header = [
        "#[cfg(feature = \"schemars\")]",
        "use schemars::JsonSchema;",
        "use serde::{Deserialize, Serialize};",
        "use serde_json::Value;",
        "use serde_with::skip_serializing_none;",
        "use std::{borrow::Cow, collections::HashMap};",
    ]

    rest_module_header = [
        "use reqwest::header::CONTENT_LENGTH;",
        "use serde_json::{json, Value};",
        "",
        "use super::{url_enc::encode_url_param as p, *};",
    ]

    rest_tag_header = ["use super::*;"]

    rest_module = """/// {tag}
#[cfg(feature = "tag-{feature}")]
pub mod {module};"""

    impl_header = "impl<TS: KeycloakTokenSupplier> KeycloakAdmin<TS>"

    error_type = "KeycloakError"

    enum_attributes = [
        "#[derive(Clone, Debug, Deserialize, Eq, PartialEq, Serialize)]",
        '#[cfg_attr(feature = "schemars", derive(JsonSchema))]',
    ]

    struct_attributes = [
        "#[skip_serializing_none]",
        "#[derive(Clone, Debug, Default, Deserialize, PartialEq, Serialize)]",
        '#[cfg_attr(feature = "schemars", derive(JsonSchema))]',
    ]

    upper_case_attribute = '#[serde(rename_all = "UPPERCASE")]'
    camel_case_attribute = '#[serde(rename_all = "camelCase")]'
    rename_attribute = '#[serde(rename = "{name}")]'
    too_many_arguments_attribute = "#[allow(clippy::too_many_arguments)]"

    request_builder = """let {mutable}builder = self
    .client
    .{call}format!("{{}}{url}", self.url))"""

    bearer_auth = "    .bearer_auth(self.token_supplier.get(&self.url).await?);"

    empty_content_length = '    .header(CONTENT_LENGTH, "0")'

    optional_query = """if let Some(v) = {name} {{
    builder = builder.query(&[("{wire_name}", v)]);
}}"""

    required_query = 'builder = builder.query(&[("{wire_name}", {name})]);'

    send = "let response = builder.send().await?;"

    unit_response = """error_check(response).await?;
Ok(())"""

    bytes_response = "Ok(error_check(response).await?.bytes().await?.to_vec())"

    json_response = "Ok(error_check(response).await?.json().await?)"


templates = Templates()
