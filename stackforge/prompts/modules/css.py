"""CSS framework modules."""

from __future__ import annotations

import textwrap

from stackforge.prompts.modules.base import ModuleCategory, Technology, TechnologyModule


class TailwindModule(TechnologyModule):
    key = Technology.TAILWIND
    title = "Tailwind CSS"
    category = ModuleCategory.CSS

    def dependencies(self) -> str:
        return textwrap.dedent("""\
            ### Tailwind CSS Dependencies:
            ```bash
            npm install -D tailwindcss postcss autoprefixer
            npx tailwindcss init -p
            ```
            """)

    def configurations(self) -> str:
        return textwrap.dedent("""\
            ### Tailwind Configurations:

            **tailwind.config.js:**
            ```javascript
            export default {
              content: [
                "./index.html",
                "./src/**/*.{vue,js,ts,jsx,tsx}",
              ],
              theme: {
                extend: {},
              },
              plugins: [],
            }
            ```

            **postcss.config.js:**
            ```javascript
            export default {
              plugins: {
                tailwindcss: {},
                autoprefixer: {},
              },
            }
            ```

            **src/index.css** (or src/style.css for Vue):
            ```css
            @tailwind base;
            @tailwind components;
            @tailwind utilities;
            ```
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### Tailwind CSS Validation:
            - tailwindcss in devDependencies
            - tailwind.config.js present
            - postcss.config.js present
            - @tailwind directives in the main stylesheet
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### Tailwind CSS - Errors to avoid:
            - **Wrong content paths** -> classes are purged
            - **Missing @tailwind directives** -> no styles are loaded
            - **Missing postcss.config.js** -> the build fails
            - **tailwindcss in dependencies** -> belongs in devDependencies
            """)


class BootstrapModule(TechnologyModule):
    key = Technology.BOOTSTRAP
    title = "Bootstrap"
    category = ModuleCategory.CSS

    def project_structure(self) -> str:
        return textwrap.dedent("""\
            ### Bootstrap Integration:
            - Bootstrap is imported from the frontend entry file
            - No extra project structure is required
            """)

    def dependencies(self) -> str:
        return textwrap.dedent("""\
            ### Bootstrap Dependencies:
            ```bash
            npm install bootstrap
            ```
            """)

    def configurations(self) -> str:
        return textwrap.dedent("""\
            ### Bootstrap Integration:

            **Vue (main.js):**
            ```javascript
            import 'bootstrap/dist/css/bootstrap.min.css'
            import 'bootstrap/dist/js/bootstrap.bundle.min.js'
            ```

            **React (main.jsx / index.js):**
            ```javascript
            import 'bootstrap/dist/css/bootstrap.min.css'
            ```
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### Bootstrap Validation:
            - bootstrap package in dependencies
            - CSS imported in the main entry file
            - JS bundle imported for interactive components
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### Bootstrap - Errors to avoid:
            - **Missing bootstrap.bundle.min.js** -> dropdowns and modals do nothing
            - **CSS not imported** -> no styling
            - **Custom CSS imported before Bootstrap** -> overrides are lost
            """)


class MaterialUIModule(TechnologyModule):
    key = Technology.MATERIAL_UI
    title = "Material UI"
    category = ModuleCategory.CSS

    def dependencies(self) -> str:
        return textwrap.dedent("""\
            ### Material UI Dependencies:
            ```bash
            npm install @mui/material @emotion/react @emotion/styled
            ```
            """)

    def configurations(self) -> str:
        return textwrap.dedent("""\
            ### Material UI Integration (main.jsx):
            ```javascript
            import { ThemeProvider, createTheme, CssBaseline } from '@mui/material'

            const theme = createTheme()
            // Wrap <App /> in <ThemeProvider theme={theme}><CssBaseline />...</ThemeProvider>
            ```
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### Material UI Validation:
            - @mui/material, @emotion/react, @emotion/styled in dependencies
            - App wrapped in ThemeProvider
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### Material UI - Errors to avoid:
            - **Missing @emotion peer dependencies** -> runtime import errors
            """)


class VuetifyModule(TechnologyModule):
    key = Technology.VUETIFY
    title = "Vuetify"
    category = ModuleCategory.CSS

    def dependencies(self) -> str:
        return textwrap.dedent("""\
            ### Vuetify Dependencies:
            ```bash
            npm install vuetify @mdi/font
            npm install -D vite-plugin-vuetify
            ```
            """)

    def configurations(self) -> str:
        return textwrap.dedent("""\
            ### Vuetify Integration (src/plugins/vuetify.js):
            ```javascript
            import 'vuetify/styles'
            import '@mdi/font/css/materialdesignicons.css'
            import { createVuetify } from 'vuetify'

            export default createVuetify()
            ```
            Register it in main.js with `app.use(vuetify)` and add `vuetify()` to the
            Vite plugins.
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### Vuetify Validation:
            - vuetify in dependencies, vite-plugin-vuetify in devDependencies
            - createVuetify() registered with app.use()
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### Vuetify - Errors to avoid:
            - **Missing 'vuetify/styles' import** -> unstyled components
            """)
