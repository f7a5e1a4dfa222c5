from shopify_rest.common.environments import flag

in_global_debug_mode = flag('SHOPIFY_DEBUG',
                            description='Enable the debug mode')
detailed_error = flag('SHOPIFY_DETAILED_ERROR', description='Provide more details on error')
