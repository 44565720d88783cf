#To build stable document identifiers
# Input: site hash, record identity, access groups, mount point
# Output: "<siteHash>/<table>/<uid>[/<additional>]"
# Same inputs = same id

def document_id(site_hash, table, uid, additional_parameters=""):
    documentid = f"{site_hash}/{table}/{uid}"
    if additional_parameters:
        documentid += f"/{additional_parameters}"
    return documentid

def page_document_id(site_hash, uid, type_num=0, language=0, access_groups="0,-1", mount_point_parameter=""):
    additional = f"{type_num}/{language}/{access_groups}"
    # Mount point precedes typeNum
    if str(mount_point_parameter) != "":
        additional = f"{mount_point_parameter}/{additional}"
    return document_id(site_hash, "pages", uid, additional)
